import itertools
import unittest

from lambdacore.grammar.pure import parse
from lambdacore.pure.substitution import fresh_name, substitute
from lambdacore.term import Abs, App, Var, alpha_equals, free_vars


class FreshNameTestCase(unittest.TestCase):

    def test_fresh_name(self):
        cases = {
            ("y", frozenset({"y"})): "y1",
            ("y", frozenset({"y", "y1", "y2"})): "y3",
            ("y1", frozenset({"y", "y1"})): "y2",
            ("x", frozenset()): "x1",
            ("foo12", frozenset({"foo1"})): "foo2",
        }
        for (name, avoid), expected in cases.items():
            self.assertEqual(expected, fresh_name(name, avoid), (name, avoid))

    def test_deterministic(self):
        avoid = {"a", "a1", "b"}
        self.assertEqual(fresh_name("a", avoid), fresh_name("a", set(avoid)))


class SubstituteTestCase(unittest.TestCase):

    def test_variables(self):
        self.assertEqual(parse("\\z z"), substitute(Var("x"), "x", parse("\\z z")))
        self.assertEqual(Var("y"), substitute(Var("y"), "x", parse("\\z z")))

    def test_applications(self):
        self.assertEqual(parse("(a b) y (a b)"), substitute(parse("x y x"), "x", parse("a b")))

    def test_shadowed(self):
        term = parse("\\x x y")
        self.assertIs(term, substitute(term, "x", Var("z")))

    def test_no_free_occurrence(self):
        term = parse("\\y y")
        self.assertIs(term, substitute(term, "x", Var("y")))

    def test_no_capture_hazard(self):
        self.assertEqual(parse("\\y (a y)"), substitute(parse("\\y x y"), "x", Var("a")))

    def test_capture_avoidance(self):
        cases = {
            ("\\y x", "x", "y"): "\\y1 y",
            ("\\y x y", "x", "y"): "\\y1 y y1",
            ("\\y \\y1 x y y1", "x", "y"): "\\y1 \\y2 y y1 y2",
            ("\\y x", "x", "\\z y"): "\\y1 \\z y",
            ("\\y x (\\y y)", "x", "f y"): "\\y1 (f y) (\\y y)",
        }
        for (term, name, value), expected in cases.items():
            result = substitute(parse(term), name, parse(value))
            self.assertEqual(parse(expected), result, (term, name, value))

    def test_renamed_binder_avoids_name(self):
        # fresh name must not collide with the substituted name either
        result = substitute(parse("\\y y1 x"), "x", parse("y y2"))
        self.assertIsInstance(result, Abs)
        self.assertNotIn(result.bound, {"y", "y1", "y2", "x"})
        self.assertEqual(parse("\\y3 y1 (y y2)"), result)

    def test_shares_unchanged_subterms(self):
        untouched = parse("\\z z")
        term = App(untouched, Var("x"))
        result = substitute(term, "x", Var("y"))
        self.assertIs(untouched, result.func)

    def test_capture_free(self):
        terms = [parse(case) for case in ["x", "\\y x", "\\y x y", "\\x x", "(\\y y x) (\\z x z)", "\\y \\z x y z",
                                          "\\y1 \\y x y1", "f (\\f x f)"]]
        values = [parse(case) for case in ["y", "z", "y z", "\\y y", "f y1", "\\z y"]]

        for term, value in itertools.product(terms, values):
            result = substitute(term, "x", value)
            if "x" in free_vars(term):
                expected = (free_vars(term) - {"x"}) | free_vars(value)
            else:
                expected = free_vars(term)
            self.assertEqual(expected, free_vars(result), (str(term), str(value)))

    def test_meaning_preserved(self):
        # substituting a fresh variable and then renaming it back is the identity up to alpha
        term = parse("\\y \\z x y (\\x x z)")
        result = substitute(term, "x", Var("y"))
        self.assertTrue(alpha_equals(parse("\\a \\b y a (\\x x b)"), result), str(result))

    def test_deep_terms(self):
        term = Var("x")
        for _ in range(5000):
            term = Abs("y", App(Var("g"), term))

        result = substitute(term, "x", Var("y"))
        self.assertEqual(frozenset({"g", "y"}), free_vars(result))
        self.assertEqual("y1", result.bound)

        spine = Var("f")
        for _ in range(5000):
            spine = App(spine, Var("x"))
        self.assertEqual(frozenset({"f", "z"}), free_vars(substitute(spine, "x", Var("z"))))

    def test_rejects_non_terms(self):
        self.assertRaises(TypeError, substitute, "x", "x", Var("y"))


if __name__ == '__main__':
    unittest.main()
