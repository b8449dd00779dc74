"""Error handling for lambdacore. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

User-facing errors fall into three disjoint kinds, each its own subclass tree:
- LexicalError: illegal character or malformed identifier
- LambdaSyntaxError: MissingVariable, MissingBody, UnclosedParenthesis, UnexpectedToken
- ReductionLimitReached: no normal form within the step bound
plus DepthExceeded for terms nested past the recursion limit, and InvalidOperator/InvalidOperand for the Church
arithmetic front end.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be thrown by ErrorHandler. exprs fill the {} slots of msg, and exprs[0]
    is the offending expression that start:end points into.
    """
    kind = "error"

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.plain = msg.format(*exprs)
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain)


class LexicalError(GenericException):
    """Raised by the lexer: the source contains something that is not a token."""
    kind = "lexical error"

    def __init__(self, msg, exprs, position, length=1):
        super().__init__(msg, exprs, start=position, end=position + length)
        self.position = position


class UnexpectedCharacter(LexicalError):

    def __init__(self, char, position, source):
        super().__init__("'{}' contains unexpected character '{}'", (source, char), position)
        self.char = char


class MalformedIdentifier(LexicalError):

    def __init__(self, text, position, source):
        super().__init__("'{}' has identifier '{}' starting with a digit", (source, text), position, len(text))
        self.text = text


class LambdaSyntaxError(GenericException):
    """Raised by the parser: the tokens do not form a valid λ-term."""
    kind = "syntax error"
    message = "'{}' is not valid λ-term grammar"

    def __init__(self, source, position, length=1):
        length = max(length, 1)
        super().__init__(self.message, source, start=position, end=position + length)
        self.position = position


class MissingVariable(LambdaSyntaxError):
    message = "'{}' is missing a variable after lambda"


class MissingBody(LambdaSyntaxError):
    message = "'{}' is missing a body after lambda abstraction"


class UnclosedParenthesis(LambdaSyntaxError):
    message = "'{}' has an unclosed parenthesis"


class UnexpectedToken(LambdaSyntaxError):
    message = "'{}' has an unexpected token"


class ReductionLimitReached(GenericException):
    """Raised when a λ-term does not reach beta normal form within the step bound."""
    kind = "reduction limit"

    def __init__(self, steps, term=None, source=""):
        super().__init__("no beta normal form found after {} steps", [str(steps)], diagnosis=False)
        self.expr = source
        self.steps = steps
        self.term = term


class DepthExceeded(GenericException):
    """Raised when a λ-term is nested deeper than the parser or printer can follow."""

    def __init__(self, source=""):
        super().__init__("term too deep to process", diagnosis=False)
        self.expr = source


class InvalidOperator(GenericException):

    def __init__(self, operator, supported):
        msg = "unknown operator '{}' (supported: " + ", ".join(supported) + ")"
        super().__init__(msg, operator, diagnosis=False)
        self.operator = operator


class InvalidOperand(GenericException):

    def __init__(self, operand):
        super().__init__("expected natural number, got '{}'", str(operand), diagnosis=False)
        self.operand = operand


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom lambdacore errors."""
    ERROR = "red"
    TRACE = "cyan"

    def __init__(self, fatal=True, trace=False, stream=None):
        self.fatal = fatal
        self.trace = trace
        self.stream = stream
        self.failures = 0
        self.traceback = {}

    @property
    def out(self):
        return self.stream if self.stream is not None else sys.stderr

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, label, expr):
        """Prints a single reduction step if tracing is enabled."""
        if self.trace:
            print(colored(f"{label} ", ErrorHandler.TRACE, attrs=["bold"]) + str(expr), file=self.out)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.ERROR
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _location(self):
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                return f"{file}:{line_num}: "
        return ""

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        self.failures += 1

        location = self._location()
        error_msg = colored(location, attrs=["bold"]) if location else ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.out)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=self.out)

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.traceback[path] = (None, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(DepthExceeded())
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
