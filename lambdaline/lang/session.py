"""Session control for lambdaline: evaluation of single lines against an environment of named functions.

evaluate is the whole pipeline for one line:

    source -> parse_line -> Binder -> environment substitution -> NormalOrderReducer -> Outcome

It never mutates the environment it is given. A successful NamedFunc line returns a new Environment with the name
added, and the caller threads that into the next call. Session does that threading for the shell.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from lambdaline.lang.error import DepthExceeded, LambdaError, StepLimitExceeded, UnboundReferenceError
from lambdaline.lang.lexical import EmptyStmt, ExecStmt, NamedFunc, parse_line
from lambdaline.pure.binder import Binder
from lambdaline.pure.printer import render
from lambdaline.pure.reducer import NormalOrderReducer


class Environment(Mapping):
    """Immutable mapping of name: NamedFunc. assign returns a new Environment, leaving this one as it was."""

    def __init__(self, lines=None):
        self._lines = dict(lines or {})

    def assign(self, name, line):
        return Environment({**self._lines, name: line})

    def __getitem__(self, name):
        return self._lines[name]

    def __iter__(self):
        return iter(self._lines)

    def __len__(self):
        return len(self._lines)

    def __repr__(self):
        return f"Environment({list(self._lines)})"


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating one line. Exactly one of line and error is set."""
    source: str
    environment: Environment
    line: object = None
    error: LambdaError = None

    @property
    def ok(self):
        return self.error is None

    @property
    def value(self):
        """The evaluated term, or None for empty lines and failures."""
        return getattr(self.line, "term", None)

    def __str__(self):
        return "" if self.value is None else render(self.value)


def resolve(term, environment, binder, strict=False):
    """Replaces free names in term by fresh copies of their environment values. Names without a value stay free,
    unless strict, in which case they raise UnboundReferenceError.

    A stored value is closed over its own binders, so every binder in the copy gets a fresh id from binder.ids and the
    names it was written with play no part in scoping.
    """
    def lookup(name):
        if name not in environment:
            if strict:
                raise UnboundReferenceError(name)
            return None
        return environment[name].term.refresh(binder.ids, {})

    return term.resolve(lookup)


def evaluate_line(line, environment, strict=False, on_step=None):
    """Evaluates a parsed line. Returns the evaluated line. Raises LambdaError on failure."""
    if isinstance(line, EmptyStmt):
        return line

    binder = Binder()
    term = resolve(binder.bind(line.term), environment, binder, strict)
    term = NormalOrderReducer(on_step).evaluate(term)

    if isinstance(line, NamedFunc):
        return NamedFunc(line.name, term)
    return ExecStmt(term)


def evaluate(source, environment=None, strict=False, on_step=None):
    """Evaluates one line of source against environment. Returns an Outcome; LambdaErrors never escape, and a term
    nested too deeply for the recursion limit fails with DepthExceeded.

    A free name with no value in environment stays free in the result (so `(λx.x) a` gives `a`). Pass strict=True to
    make such a name fail the line with UnboundReferenceError instead.
    """
    if environment is None:
        environment = Environment()

    try:
        line = evaluate_line(parse_line(source), environment, strict, on_step)
    except LambdaError as error:
        return Outcome(source, environment, error=error)
    except RecursionError:
        return Outcome(source, environment, error=DepthExceeded())

    if isinstance(line, NamedFunc):
        environment = environment.assign(line.name, line)
    return Outcome(source, environment, line=line)


class Session:
    """Governs a lambdaline session: the environment of named funcs and the results so far."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, strict=False, max_steps=None, trace=False, path=SH_FILE):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.strict = strict        # whether undefined names are errors
        self.max_steps = max_steps  # beta reductions allowed per line, None for no bound
        self.trace = trace          # whether to print every beta reduction

        self.environment = Environment()
        self.results = []

    def on_step(self, steps):
        """Returns the on_step hook for one line: enforces self.max_steps and prints steps if self.trace."""
        def hook(redex, contractum):
            steps.append(redex)
            if self.trace:
                self.error_handler.trace("β", f"{render(redex)}  →  {render(contractum)}")
            if self.max_steps is not None and len(steps) > self.max_steps:
                raise StepLimitExceeded(self.max_steps)

        return hook

    def add(self, source, line_num=1):
        """Evaluates source and moves the session's environment forward. Raises the LambdaError if it failed."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        outcome = evaluate(source, self.environment, self.strict, self.on_step([]))
        if not outcome.ok:
            raise outcome.error

        self.environment = outcome.environment
        if outcome.value is not None:
            self.results.append(outcome)

        self.error_handler.remove_line(self.path)  # error was not raised
        return outcome

    def pop(self):
        """Removes and returns the latest result."""
        return self.results.pop()
