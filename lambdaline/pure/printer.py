"""Converts IR terms back into surface syntax.

Output can be read back by the parser as long as no subscripted names are needed:

- nested functions share one λ: λx.λy.x is printed λxy.x
- application is juxtaposition; an application or function used as an operand is parenthesized: (λx.x)y, f(gx)
- a function body is parenthesized only if it is an application: λx.(xx)

Binders keep the name they were written with unless that name is already taken in scope, by a free variable or by a
live binder with another id. Then the first free name from ALPHABET is used instead.
"""

from itertools import count
from string import ascii_lowercase

from lambdaline.pure import ir


GREEK = "αβγδεζηθικμνξοπρστυφχψω"  # no λ
CIRCLED = "".join(chr(code) for code in range(ord("ⓐ"), ord("ⓩ") + 1))
ACCENTED = "àáâãäåæçèéêëìíîïðñòóôõöøùúûüýþÿ"
ALPHABET = ascii_lowercase + GREEK + CIRCLED + ACCENTED

SUBS = ["₀", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₉"]


def subscript(name, num):
    """Returns name with subscript of num."""
    return name + "".join(SUBS[int(digit)] for digit in str(num))


def display_names():
    """Yields every candidate display name in order: ALPHABET, then ALPHABET with subscripts ₁, ₂, ..."""
    yield from ALPHABET
    for num in count(1):
        for name in ALPHABET:
            yield subscript(name, num)


class Names:
    """Display name bookkeeping for one render call."""

    def __init__(self, free):
        self.claims = {name: None for name in free}  # display name: binding id, None for free names
        self.display = {}                            # binding id: display name

    def claim(self, binding_id, name):
        """Gives binding_id a display name, preferring name. Returns the name given."""
        if name in self.claims and self.claims[name] != binding_id:
            name = next(candidate for candidate in display_names() if candidate not in self.claims)

        self.claims[name] = binding_id
        self.display[binding_id] = name
        return name

    def release(self, binding_id):
        """Frees binding_id's display name once its scope has been printed."""
        del self.claims[self.display.pop(binding_id)]

    def lookup(self, var):
        if var.binding_id not in self.display:
            # binder is outside the printed term
            return self.claim(var.binding_id, var.name)
        return self.display[var.binding_id]


class Printer:
    """Renders a single term. Not reusable: names claimed during one render stay with that render."""

    def __init__(self, term):
        self.term = term
        self.names = Names(term.free_names())

    def render(self):
        return self._render(self.term)

    def _render(self, term):
        if isinstance(term, ir.Function):
            return self._function(term)
        elif isinstance(term, ir.Application):
            return self._operand(term.first) + self._operand(term.second)
        elif isinstance(term, ir.Bound):
            return self.names.lookup(term)
        return term.name

    def _operand(self, term):
        text = self._render(term)
        if isinstance(term, (ir.Application, ir.Function)):
            return f"({text})"
        return text

    def _function(self, term):
        params = []
        claimed = []
        while isinstance(term, ir.Function):
            if isinstance(term.param, ir.Bound):
                params.append(self.names.claim(term.param.binding_id, term.param.name))
                claimed.append(term.param.binding_id)
            else:
                params.append(term.param.name)
            term = term.body

        body = self._render(term)
        if isinstance(term, ir.Application):
            body = f"({body})"

        for binding_id in claimed:
            self.names.release(binding_id)
        return f"λ{''.join(params)}.{body}"


def render(term):
    """Returns the surface syntax of term."""
    return Printer(term).render()
