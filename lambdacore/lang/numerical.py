"""Natural numbers encoded as Church numerals, and the arithmetic combinators that operate on them. The combinators
are written in plain lambda calculus syntax and parsed, thus keeping everything pure as possible.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lambdacore.grammar.pure import parse
from lambdacore.lang.error import InvalidOperand, InvalidOperator
from lambdacore.pure.reduction import NormalOrderReducer
from lambdacore.term import Abs, App, Var

ADD = parse(r"\m \n \f \x m f (n f x)")
MUL = parse(r"\m \n \f m (n f)")
PRED = parse(r"\n \f \x n (\g \h h (g f)) (\u x) (\u u)")
SUB = Abs("m", Abs("n", App(App(Var("n"), PRED), Var("m"))))  # \m \n n PRED m, floors at 0

OPERATORS = {"+": ADD, "*": MUL, "-": SUB}


def cnumber(num):
    """Returns the Church numeral λf.λx.f (f (... (f x))) of natural number num (cnum = Church numeral)."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise InvalidOperand(num)

    body = Var("x")
    for _ in range(num):
        body = App(Var("f"), body)
    return Abs("f", Abs("x", body))


def number(cnum):
    """Returns the natural number that Church numeral cnum denotes, up to renaming of its two bound variables. If cnum
    isn't a Church numeral, returns None.
    """
    if not isinstance(cnum, Abs) or not isinstance(cnum.body, Abs):
        return None

    func, arg = cnum.bound, cnum.body.bound
    nth_body = cnum.body.body

    num = 0
    while isinstance(nth_body, App):
        if func == arg or nth_body.func != Var(func):
            return None  # when func == arg, the inner binder shadows the outer one
        nth_body = nth_body.arg
        num += 1

    return num if nth_body == Var(arg) else None


def arithmetic(left, operator, right):
    """Returns the λ-term OPERATOR left right, with both operands encoded as Church numerals. The operator is checked
    before anything is built.
    """
    if operator not in OPERATORS:
        raise InvalidOperator(operator, list(OPERATORS))
    return App(App(OPERATORS[operator], cnumber(left)), cnumber(right))


def calculate(left, operator, right, reducer=None):
    """Builds the arithmetic λ-term and beta-reduces it. Returns the ReductionResult."""
    term = arithmetic(left, operator, right)
    if reducer is None:
        reducer = NormalOrderReducer()
    return reducer.reduce(term)
