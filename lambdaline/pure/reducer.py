"""Normal-order beta reduction of IR terms.

Sources: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR,
         https://plato.stanford.edu/entries/lambda-calculus/#Com

The leftmost-outermost redex is always contracted first, and arguments are substituted unevaluated, so a normal form
is found whenever one exists. Applications whose head never becomes a Function (`x y`, `(x y) λz.z`) are not errors:
their operands are normalized and the application is kept as it is.

There is no step bound. Terms without a normal form, e.g. (λx.xx)(λx.xx), never return; a caller that needs a bound
passes an on_step hook that raises once it has seen enough steps.
"""

from lambdaline.pure import ir


class NormalOrderReducer:
    """Implements normal-order beta reduction of a bound IR term."""

    def __init__(self, on_step=None):
        """on_step(redex, contractum) is called after every beta reduction."""
        self.on_step = on_step
        self.steps = 0
        self.ids = ir.BindingIds()

    def evaluate(self, term):
        """Returns the normal form of term."""
        self.ids.reserve(term.binding_ids())
        return self._normalize(term)

    def _normalize(self, term):
        term = self._head(term)
        if isinstance(term, ir.Function):
            return ir.Function(term.param, self._normalize(term.body))
        elif isinstance(term, ir.Application):
            return ir.Application(self._normalize(term.first), self._normalize(term.second))
        return term

    def _head(self, term):
        """Contracts head redexes until term is a variable, a Function, or an application whose head is stuck."""
        while isinstance(term, ir.Application):
            first = self._head(term.first)
            if not isinstance(first, ir.Function):
                return ir.Application(first, term.second)
            term = self.apply(first, term.second)
        return term

    def apply(self, function, argument):
        """Beta-reduces (function argument)."""
        if isinstance(function.param, ir.Bound):
            contractum = function.body.substitute(function.param.binding_id, argument, self.ids)
        else:
            contractum = function.body

        self.steps += 1
        if self.on_step is not None:
            self.on_step(ir.Application(function, argument), contractum)
        return contractum


def evaluate(term, on_step=None):
    """Returns the normal form of term."""
    return NormalOrderReducer(on_step).evaluate(term)
