"""Uses the pure lambda calculus core to interpret files of λ-terms, evaluate Church numeral arithmetic, or run in
command-line mode. Also uses error handling context manager. Called from the lc executable script.

    lc FILE              reduce every non-blank line of FILE, printing one normal form per line
    lc NUM OP NUM        reduce NUM OP NUM on Church numerals, where OP is one of + * -
    lc                   interactive shell
"""

import argparse
import sys

from lambdacore.lang.error import ErrorHandler, InvalidOperand, ReductionLimitReached
from lambdacore.lang.numerical import calculate, number
from lambdacore.lang.session import Session, tracer
from lambdacore.lang.shell import Shell
from lambdacore.pure.reduction import LimitReached, NormalOrderReducer
from lambdacore.term import display


def build_parser():
    parser = argparse.ArgumentParser(prog="lc", description="Untyped lambda calculus interpreter (normal order).")
    parser.add_argument("args", nargs="*", metavar="FILE | NUM OP NUM",
                        help="file to interpret, or an arithmetic problem such as '2 + 3' (if empty, goes to "
                             "command-line mode)")
    parser.add_argument("--max-steps", type=int, default=NormalOrderReducer.MAX_STEPS,
                        help="maximum number of beta reductions per term (default: %(default)s)")
    parser.add_argument("--trace", action="store_true", help="print every reduction step to stderr")
    parser.add_argument("--fail-fast", action="store_true", help="stop at the first line that fails")
    parser.add_argument("--decode", action="store_true", help="in arithmetic mode, also print the decoded number")
    parser.add_argument("--tree", action="store_true", help="in arithmetic mode, print the result as a syntax tree")
    return parser


def parse_natural(text):
    try:
        return int(text)
    except ValueError:
        raise InvalidOperand(text)


def run_file(path, args, error_handler):
    """Prints the normal form of every line in path. Returns the exit code."""
    sess = Session(error_handler, path, max_steps=args.max_steps, fail_fast=args.fail_fast)
    for outcome in sess.run():
        if outcome.ok:
            print(outcome.output)
    return 0 if sess.ok else 1


def run_arithmetic(left, operator, right, args, error_handler):
    """Prints the normal form of left operator right on Church numerals. Returns the exit code."""
    reducer = NormalOrderReducer(args.max_steps, on_step=tracer(error_handler))
    result = calculate(parse_natural(left), operator, parse_natural(right), reducer)
    if isinstance(result, LimitReached):
        raise ReductionLimitReached(result.steps, result.term, f"{left} {operator} {right}")

    print(display(result.term) if args.tree else result.term)
    if args.decode:
        print(number(result.term))
    return 0


def main(argv=None):
    """Runs lc interpreter and returns the exit code: 0 only if every expression succeeded. Called from lc executable
    script.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_steps < 0:
        parser.error("--max-steps must be non-negative")
    if len(args.args) not in (0, 1, 3):
        parser.error("expected FILE or NUM OP NUM")

    code = 0
    with ErrorHandler(fatal=False, trace=args.trace) as error_handler:
        if len(args.args) == 1:
            code = run_file(args.args[0], args, error_handler)

        elif len(args.args) == 3:
            code = run_arithmetic(*args.args, args, error_handler)

        else:
            Shell(Session(error_handler, Session.SH_FILE, max_steps=args.max_steps)).cmdloop()
            return 0

    return 1 if code or error_handler.failures else 0


if __name__ == "__main__":
    sys.exit(main())
