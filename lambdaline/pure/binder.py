"""Scope resolution: rewrites names into binding ids.

A Binder walks a tree depth first, keeping a stack of live binding ids per name. Entering a Function pushes an id for
its parameter (a fresh one, or the one it already has if the tree was bound before), leaving it pops that id again so
sibling branches never see it. A name is Bound to the innermost live id for it, or stays Unbound.

One Binder is one pass: its BindingIds carry over between bind calls, so terms bound by the same Binder (a line and the
environment values spliced into it) never share ids.
"""

from collections import defaultdict

from lambdaline.pure import ir


class Binder:

    def __init__(self, ids=None):
        self.ids = ids if ids is not None else ir.BindingIds()
        self.scopes = defaultdict(list)  # name: [live ids, innermost last]

    def enter(self, name, binding_id=None):
        """Pushes binding_id (or a fresh id) as the innermost binder of name. Returns the id."""
        if binding_id is None:
            binding_id = self.ids.fresh()
        self.scopes[name].append(binding_id)
        return binding_id

    def leave(self, name):
        """Pops the innermost binder of name."""
        self.scopes[name].pop()
        if not self.scopes[name]:
            del self.scopes[name]

    def lookup(self, name):
        """Returns the innermost live id for name, or None."""
        scope = self.scopes.get(name)
        return scope[-1] if scope else None

    def bind(self, tree):
        """Returns the bound IR for tree, which may be a raw parse tree or (partially bound) IR."""
        if not isinstance(tree, ir.Term):
            tree = ir.from_syntax(tree)

        self.ids.reserve(tree.binding_ids())
        self.scopes.clear()
        return tree.bind(self)


def bind(tree):
    """Binds tree in a pass of its own."""
    return Binder().bind(tree)
