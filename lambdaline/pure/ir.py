"""Intermediate representation of lambda terms after scope resolution.

Every variable is either Bound (it carries the id of the one Function that binds it, plus the name it was written
with) or Unbound (a free name, to be looked up in the environment). Binding ids are what substitution keys on, so the
whole tree must keep one invariant: no two distinct Functions share an id, and an id always denotes exactly one
Function. Names are kept only for display.

Terms are immutable: every operation below returns a new tree.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from lambdaline.pure import parser


class BindingIds:
    """Source of fresh binding ids for one pass. The first fresh id is one past the largest id already in use."""

    def __init__(self, used=()):
        self.used = set()
        self._next = 1
        self.reserve(used)

    def reserve(self, ids):
        """Marks ids as in use so that fresh never returns them."""
        for binding_id in ids:
            self.used.add(binding_id)
            self._next = max(self._next, binding_id + 1)

    def fresh(self):
        binding_id = self._next
        self.used.add(binding_id)
        self._next += 1
        return binding_id


class Term(ABC):
    """Superclass of every IR node."""

    @abstractmethod
    def binding_ids(self):
        """Returns the set of binding ids used anywhere in this term."""

    @abstractmethod
    def free_names(self):
        """Returns the set of names of Unbound variables in this term."""

    @abstractmethod
    def bind(self, binder):
        """Returns this term with names resolved against binder's live scopes. See pure.binder."""

    @abstractmethod
    def unbind(self):
        """Returns this term with every Bound variable (and Function parameter) turned back into a plain name."""

    @abstractmethod
    def substitute(self, binding_id, term, ids):
        """Returns this term with every Bound occurrence of binding_id replaced by a copy of term. Each copy has its
        own binders renumbered from ids, so duplicating term never duplicates a binder.
        """

    @abstractmethod
    def refresh(self, ids, renames):
        """Returns a copy of this term whose binders get fresh ids from ids. renames maps old ids to new ones for the
        binders entered so far; ids of binders outside this term are left alone.
        """

    @abstractmethod
    def resolve(self, lookup):
        """Returns this term with each Unbound name replaced by lookup(name), where that is not None."""


class Var(Term):
    """Superclass of Bound and Unbound."""

    def substitute(self, binding_id, term, ids):
        return self

    def refresh(self, ids, renames):
        return self


@dataclass(frozen=True)
class Bound(Var):
    binding_id: int
    name: str

    def binding_ids(self):
        return {self.binding_id}

    def free_names(self):
        return set()

    def bind(self, binder):
        return self

    def unbind(self):
        return Unbound(self.name)

    def substitute(self, binding_id, term, ids):
        if self.binding_id == binding_id:
            return term.refresh(ids, {})
        return self

    def refresh(self, ids, renames):
        if self.binding_id in renames:
            return Bound(renames[self.binding_id], self.name)
        return self

    def resolve(self, lookup):
        return self


@dataclass(frozen=True)
class Unbound(Var):
    name: str

    def binding_ids(self):
        return set()

    def free_names(self):
        return {self.name}

    def bind(self, binder):
        binding_id = binder.lookup(self.name)
        if binding_id is None:
            return self
        return Bound(binding_id, self.name)

    def unbind(self):
        return self

    def resolve(self, lookup):
        replacement = lookup(self.name)
        return self if replacement is None else replacement


@dataclass(frozen=True)
class Application(Term):
    first: Term
    second: Term

    def binding_ids(self):
        return self.first.binding_ids() | self.second.binding_ids()

    def free_names(self):
        return self.first.free_names() | self.second.free_names()

    def bind(self, binder):
        return Application(self.first.bind(binder), self.second.bind(binder))

    def unbind(self):
        return Application(self.first.unbind(), self.second.unbind())

    def substitute(self, binding_id, term, ids):
        return Application(self.first.substitute(binding_id, term, ids), self.second.substitute(binding_id, term, ids))

    def refresh(self, ids, renames):
        return Application(self.first.refresh(ids, renames), self.second.refresh(ids, renames))

    def resolve(self, lookup):
        return Application(self.first.resolve(lookup), self.second.resolve(lookup))


@dataclass(frozen=True)
class Function(Term):
    """param is Bound once the function has been through a Binder, Unbound before."""
    param: Var
    body: Term

    def binding_ids(self):
        return self.param.binding_ids() | self.body.binding_ids()

    def free_names(self):
        # the parameter itself is not a reference; bound occurrences in the body are already Bound
        return self.body.free_names()

    def bind(self, binder):
        name = self.param.name
        if isinstance(self.param, Bound):
            binding_id = binder.enter(name, self.param.binding_id)
        else:
            binding_id = binder.enter(name)

        body = self.body.bind(binder)
        binder.leave(name)

        return Function(Bound(binding_id, name), body)

    def unbind(self):
        return Function(Unbound(self.param.name), self.body.unbind())

    def substitute(self, binding_id, term, ids):
        return Function(self.param, self.body.substitute(binding_id, term, ids))

    def refresh(self, ids, renames):
        if not isinstance(self.param, Bound):
            return Function(self.param, self.body.refresh(ids, renames))

        renames = {**renames, self.param.binding_id: ids.fresh()}
        return Function(self.param.refresh(ids, renames), self.body.refresh(ids, renames))

    def resolve(self, lookup):
        return Function(self.param, self.body.resolve(lookup))


def from_syntax(tree):
    """Converts a raw pure.parser tree into an independent, fully Unbound IR tree."""
    if isinstance(tree, parser.Variable):
        return Unbound(tree.name)
    elif isinstance(tree, parser.Application):
        return Application(from_syntax(tree.first), from_syntax(tree.second))
    elif isinstance(tree, parser.Function):
        return Function(Unbound(tree.param), from_syntax(tree.body))
    raise TypeError(f"cannot convert {type(tree).__name__} to IR")
