import dataclasses
import unittest

from lambdacore.grammar.pure import parse
from lambdacore.term import Abs, App, Var, alpha_equals, display, free_vars, is_redex


class TermTestCase(unittest.TestCase):

    def test_printing(self):
        cases = {
            Var("x"): "x",
            Abs("x", Var("x")): "(\\x x)",
            App(Var("f"), Var("x")): "(f x)",
            App(App(Var("f"), Var("x")), Var("y")): "((f x) y)",
            Abs("x", Abs("y", App(Var("x"), Var("y")))): "(\\x (\\y (x y)))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case), case)

    def test_structural_equality(self):
        self.assertEqual(parse("\\x x"), Abs("x", Var("x")))
        self.assertNotEqual(parse("\\x x"), parse("\\y y"))
        self.assertNotEqual(Var("x"), Abs("x", Var("x")))
        self.assertEqual(hash(parse("f (\\x x)")), hash(parse("f (\\x x)")))

    def test_immutable(self):
        term = Abs("x", Var("x"))
        self.assertRaises(dataclasses.FrozenInstanceError, setattr, term, "bound", "y")

    def test_free_vars(self):
        cases = {
            "x": {"x"},
            "\\x x": set(),
            "\\x y": {"y"},
            "f x": {"f", "x"},
            "\\x \\y x y z": {"z"},
            "(\\x x) x": {"x"},
            "\\x (\\x x) x": set(),
        }
        for case, expected in cases.items():
            self.assertEqual(frozenset(expected), free_vars(parse(case)), case)

        self.assertRaises(TypeError, free_vars, "x")

    def test_alpha_equals(self):
        should_pass = [
            ("\\x x", "\\y y"),
            ("\\x \\y x", "\\a \\b a"),
            ("\\x \\y y", "\\y \\x x"),
            ("\\x y", "\\z y"),
            ("f (\\x x)", "f (\\z z)"),
            ("\\x \\x x", "\\a \\b b"),
        ]
        for left, right in should_pass:
            self.assertTrue(alpha_equals(parse(left), parse(right)), (left, right))

        should_fail = [
            ("\\x x", "\\x y"),
            ("\\x y", "\\x z"),
            ("\\x \\y x", "\\x \\y y"),
            ("\\x y", "\\y y"),
            ("x", "y"),
            ("f x", "\\f x"),
            ("\\x \\x x", "\\a \\b a"),
        ]
        for left, right in should_fail:
            self.assertFalse(alpha_equals(parse(left), parse(right)), (left, right))

    def test_is_redex(self):
        self.assertTrue(is_redex(parse("(\\x x) y")))
        self.assertFalse(is_redex(parse("x y")))
        self.assertFalse(is_redex(parse("\\x (\\y y) x")))

    def test_display(self):
        expected = ("Application(expr='(f (\\x x))', nodes=[\n"
                    "    Variable(expr='f'),\n"
                    "    Abstraction(expr='(\\x x)', nodes=[\n"
                    "        Variable(expr='x'),\n"
                    "        Variable(expr='x')\n"
                    "    ])\n"
                    "])")
        self.assertEqual(expected, display(parse("f (\\x x)")))
        self.assertEqual("Variable(expr='x')", display(Var("x")))

    def test_invalid_names(self):
        should_fail = ["", "1x", "x-y", "λ", "x y", "é", None, 3]
        for case in should_fail:
            self.assertRaises(ValueError, Var, case)
            self.assertRaises(ValueError, Abs, case, Var("y"))

        self.assertRaises(ValueError, Abs, "y", Var(""))
        self.assertEqual("(\\y x1)", str(Abs("y", Var("x1"))))

    def test_deep_terms(self):
        term = Var("x")
        for _ in range(5000):
            term = App(Var("f"), term)
        term = Abs("x", term)

        self.assertEqual(frozenset({"f"}), free_vars(term))
        self.assertEqual("(\\x " + "(f " * 5000 + "x" + ")" * 5001, str(term))

        spine = Var("f")
        for _ in range(5000):
            spine = App(spine, Abs("x", Var("x")))
        self.assertEqual(frozenset({"f"}), spine.free_vars)
        self.assertTrue(str(spine).startswith("(" * 5000 + "f (\\x x))"))


if __name__ == '__main__':
    unittest.main()
