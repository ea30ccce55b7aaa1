"""Error handling for lambdaline. Only LambdaErrors should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The pure core raises these errors; lang.session.evaluate turns them into failed Outcomes, and the shell hands them to
an ErrorHandler for display.
"""

import sys

from termcolor import colored


END_OF_STRING = "End of String"


class LambdaError(Exception):
    """Base lambdaline error. span is the (start, end) Span of the offending source, if there is one."""

    def __init__(self, msg, span=None, diagnosis=True, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.span = span
        self.diagnosis = diagnosis
        self.internal = internal


class LexError(LambdaError):
    """End of input was reached while a token was required."""

    def __init__(self, span):
        super().__init__(f"expected token, found `{END_OF_STRING}`", span)


class ParseError(LambdaError):
    """Grammar violation. found is the offending Token, or END_OF_STRING if the line ended too early."""

    def __init__(self, expected, found, span):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found `{found}`", span)

    @property
    def at_end_of_input(self):
        """Whether more input could complete the line."""
        return self.found == END_OF_STRING


class UnboundReferenceError(LambdaError):
    """A free name has no entry in the environment (strict mode only)."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"'{name}' is not defined", diagnosis=False)


class StepLimitExceeded(LambdaError):
    """Raised by a caller-imposed step bound, never by the reducer itself."""

    def __init__(self, limit):
        self.limit = limit
        super().__init__(f"no normal form found within {limit} beta reductions", diagnosis=False)


class DepthExceeded(LambdaError):
    """A term is nested more deeply than the Python recursion limit allows."""

    def __init__(self):
        super().__init__("normal form might exist, but maximum recursion depth exceeded", diagnosis=False)


def index_to_line_col(source, index):
    """Returns 1-based (line, col) of index in source. Indices past the end map to the end of the last line."""
    lines = source.split("\n")
    chars_left = index
    for line_num, line in enumerate(lines, 1):
        if chars_left <= len(line):
            return line_num, chars_left + 1
        chars_left -= len(line) + 1
    return len(lines), len(lines[-1]) + 1


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print lambdaline errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(line, span, warning=False):
        """Returns line with the part covered by span highlighted, and a ^~~ underline beneath it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        start, end = span.start, max(span.end, span.start + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _location(self, error):
        """Returns 'file:line:col: ' for the most recently registered line, or '' if none is registered."""
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                __, col = index_to_line_col(line, error.span.start if error.span else 0)
                return colored(f"{file}:{line_num}:{col}: ", attrs=["bold"]), line
        return "", None

    def warn(self, error):
        """Prints error as a warning."""
        location, line = self._location(error)
        print(location + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

        if line is not None and error.span and error.diagnosis:
            print(ErrorHandler.diagnose(line, error.span, warning=True))

    def trace(self, label, msg):
        """Prints an informational line, e.g. a reduction step."""
        print(colored(f"{label}  ", attrs=["bold"]) + msg)

    def throw(self, error):
        """Prints error using self.traceback. error must be a LambdaError, and self.traceback must be a dict of
        file: (line, line_num) representing origination of error.
        """
        location, line = self._location(error)

        error_msg = location
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and line is not None and error.span and error.diagnosis:
            print(ErrorHandler.diagnose(line, error.span))

        if self.fatal:
            sys.exit(1)
        for file in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LambdaError("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(DepthExceeded())
        elif exc_type is not None and issubclass(exc_type, LambdaError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LambdaError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
