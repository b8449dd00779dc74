"""Session control for lambdacore. Splits a file (or literal source) into lines and runs every non-blank line through
the pure pipeline: tokenize, parse, beta-reduce, print. Each line is processed independently; a failing line is
recorded and reported, and by default the following lines still run.
"""

from collections import deque
from dataclasses import dataclass
from typing import Optional

from lambdacore.grammar.pure import parse
from lambdacore.lang.error import DepthExceeded, GenericException, ReductionLimitReached
from lambdacore.pure.reduction import LimitReached, NormalOrderReducer


@dataclass(frozen=True)
class Outcome:
    """Result of running one line: exactly one of output (printed normal form) and error is set."""
    line_num: int
    source: str
    output: Optional[str] = None
    error: Optional[GenericException] = None

    @property
    def ok(self):
        return self.error is None


def evaluate(expr, reducer=None):
    """Parses and beta-reduces expr, returning the printed normal form (None if expr is blank). Raises a
    LexicalError, LambdaSyntaxError or ReductionLimitReached.
    """
    term = parse(expr)
    if term is None:
        return None

    if reducer is None:
        reducer = NormalOrderReducer()
    result = reducer.reduce(term)

    if isinstance(result, LimitReached):
        raise ReductionLimitReached(result.steps, result.term, expr)
    return str(result.term)


def tracer(error_handler):
    """Returns an on_step callback that prints reduction steps through error_handler."""

    def on_step(steps, term):
        error_handler.register_step(f"β{steps}", term)

    return on_step


class Session:
    """Governs a lambdacore session: the lines waiting to run and the outcomes of the lines that already ran."""
    SH_FILE = "<in>"  # command-line interpreter filename
    STR_FILE = "<string>"  # filename used for literal source

    def __init__(self, error_handler, path=SH_FILE, source=None, max_steps=None, fail_fast=False):
        """Reads path unless source is given or path is the shell's reserved filename. Lines are queued, not run."""
        self.error_handler = error_handler
        self.path = path            # used for error messages
        self.fail_fast = fail_fast  # stop at the first failing line
        self.error_handler.register_file(path)

        self.reducer = NormalOrderReducer(max_steps, on_step=tracer(error_handler))

        self.to_exec = deque()  # queue of (line num, line) waiting to run
        self.results = []       # list of Outcomes, in input order

        if source is None and path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        if source is not None:
            for line_num, line in enumerate(source.splitlines()):
                self.add(line, line_num + 1)

    @staticmethod
    def preprocess_line(line):
        """Removes surrounding whitespace. Blank lines become empty strings."""
        return line.strip()

    def add(self, line, line_num):
        """Queues line for running. Blank lines are ignored. Returns whether or not line was queued."""
        line = Session.preprocess_line(line)
        if not line:
            return False
        self.to_exec.append((line_num, line))
        return True

    def run(self):
        """Runs every queued line in order. Errors are reported through the error handler and recorded in the line's
        Outcome. Returns the new Outcomes.
        """
        outcomes = []
        while self.to_exec:
            line_num, line = self.to_exec.popleft()
            self.error_handler.register_line(self.path, line, line_num)

            error = None
            try:
                output = evaluate(line, self.reducer)
            except GenericException as exc:
                error = exc
            except RecursionError:  # the parser recurses once per nested parenthesis or lambda
                error = DepthExceeded(line)

            if error is None:
                outcome = Outcome(line_num, line, output=output)
                self.error_handler.remove_line(self.path)
            else:
                outcome = Outcome(line_num, line, error=error)
                self.error_handler.throw(error)

            outcomes.append(outcome)
            if not outcome.ok and self.fail_fast:
                self.to_exec.clear()

        self.results.extend(outcomes)
        return outcomes

    @property
    def ok(self):
        return all(outcome.ok for outcome in self.results)
