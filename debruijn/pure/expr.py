"""Nameless (De Bruijn) lambda terms and the index bookkeeping that keeps them correct.

A term is a binary tree of three node types:

```
<term> ::= Variable(index)           ; index counts enclosing λs between the occurrence and its binder (0 = innermost)
         | Application(fun, arg)
         | Abstraction(param, body)  ; param is the display name, only used by the parser/printer
```

Trees are owned exclusively by whoever holds the root: no node is ever referenced from two places, and the reducer
rewrites nodes in place. Callers that want to reuse a tree in two positions must copy() it first. Building a tree by
hand whose indices point past the outermost binder is the caller's responsibility; the engine does not check it, and
such a variable behaves as an opaque free variable until it is printed (where it fails, see display.py).

Three structural operations keep indices consistent when subterms move across binders:

- shift(start, count): the subterm moves inward under count new binders, so every index >= start (start growing by
  one per λ crossed) grows by count. shifted() is the copying variant.
- try_unshift(start, count): the subterm moves outward past count binders. Only possible if nothing references those
  binders, i.e. no index falls in [start, start + count). On success every index >= start + count shrinks by count;
  on failure the subterm is left exactly as it was.
- substitute(idx, slot, may_take_value): replaces every occurrence of idx with the value held by slot and removes
  binder idx from the index space. The last occurrence may take the value itself instead of a copy (see Slot).
"""

from abc import ABC, abstractmethod


class Slot:
    """Holds the value being substituted so that its last use site can take it instead of copying it. After take(),
    the slot is empty and must not be read again.
    """

    def __init__(self, expr):
        self.expr = expr

    def take(self):
        expr, self.expr = self.expr, None
        return expr

    @property
    def empty(self):
        return self.expr is None


class Expression(ABC):
    """Superclass of all term nodes."""

    @abstractmethod
    def shifted(self, start, count):
        """Returns a copy of self moved under count extra binders. Indices below start refer to binders copied along
        with the term and are kept as-is.
        """

    @abstractmethod
    def shift(self, start, count):
        """In-place version of shifted."""

    @abstractmethod
    def try_unshift(self, start, count):
        """If self does not reference any index in [start, start + count), removes that band from the index space and
        returns True. Otherwise returns False and leaves self unchanged.
        """

    @abstractmethod
    def substitute(self, idx, slot, may_take_value):
        """Replaces every occurrence of idx with slot's value, shifted by idx so that the value's own free indices stay
        correct, and decrements indices above idx. The value is assumed to live in the context idx + 1 binders out from
        self. Returns the node that replaces self (which is self unless self is the substituted variable).

        may_take_value allows the substitution to move the value out of slot at the last occurrence instead of copying
        it; Application.substitute makes sure at most one site ever gets to do this.
        """

    @abstractmethod
    def _equals(self, other):
        """Structural equality, names ignored."""

    def copy(self):
        """Returns a structurally identical tree that shares no nodes with self."""
        return self.shifted(0, 0)

    def __eq__(self, other):
        return isinstance(other, Expression) and self._equals(other)

    __hash__ = None

    def __str__(self):
        from debruijn.pure.display import display
        return display(self)


class Variable(Expression):
    """Reference to the binder index hops out."""

    def __init__(self, index):
        self.index = index

    def shifted(self, start, count):
        return Variable(self.index + count if self.index >= start else self.index)

    def shift(self, start, count):
        if self.index >= start:
            self.index += count

    def try_unshift(self, start, count):
        if self.index >= start + count:
            self.index -= count
            return True
        return self.index < start

    def substitute(self, idx, slot, may_take_value):
        if self.index == idx:
            if may_take_value:
                value = slot.take()
                value.shift(0, idx)
                return value
            return slot.expr.shifted(0, idx)

        if self.index > idx:
            self.index -= 1
        return self

    def _equals(self, other):
        return isinstance(other, Variable) and self.index == other.index

    def __repr__(self):
        return f"Variable({self.index})"


class Application(Expression):
    """fun applied to arg."""

    def __init__(self, fun, arg):
        self.fun = fun
        self.arg = arg

    def try_beta_reduce(self):
        """Returns (λx.M) N with N substituted for x in M, or None if fun is not an abstraction. self must be discarded
        once this returns a node: fun's body and arg are reused to build the result.
        """
        if not isinstance(self.fun, Abstraction):
            return None
        return self.fun.body.substitute(0, Slot(self.arg), True)

    def shifted(self, start, count):
        return Application(self.fun.shifted(start, count), self.arg.shifted(start, count))

    def shift(self, start, count):
        self.fun.shift(start, count)
        self.arg.shift(start, count)

    def try_unshift(self, start, count):
        if not self.fun.try_unshift(start, count):
            return False
        if not self.arg.try_unshift(start, count):
            self.fun.shift(start, count)  # undo fun's half
            return False
        return True

    def substitute(self, idx, slot, may_take_value):
        # if arg does not reference idx, it is done (unshifting is all substitution would do to it) and fun is the
        # only side left that may take the value
        if may_take_value and self.arg.try_unshift(idx, 1):
            self.fun = self.fun.substitute(idx, slot, True)
            return self

        self.fun = self.fun.substitute(idx, slot, False)
        self.arg = self.arg.substitute(idx, slot, may_take_value)
        return self

    def _equals(self, other):
        return isinstance(other, Application) and self.fun == other.fun and self.arg == other.arg

    def __repr__(self):
        return f"Application({self.fun!r}, {self.arg!r})"


class Abstraction(Expression):
    """λparam.body. param is only a display name; body refers to this binder as index 0."""

    def __init__(self, param, body):
        self.param = param
        self.body = body

    def try_eta_reduce(self):
        """Returns f for λx.(f x) when f does not reference x, or None. self must be discarded once this returns a
        node.
        """
        body = self.body
        if not isinstance(body, Application):
            return None
        if not isinstance(body.arg, Variable) or body.arg.index != 0:
            return None
        if body.fun.try_unshift(0, 1):
            return body.fun
        return None

    def shifted(self, start, count):
        return Abstraction(self.param, self.body.shifted(start + 1, count))

    def shift(self, start, count):
        self.body.shift(start + 1, count)

    def try_unshift(self, start, count):
        return self.body.try_unshift(start + 1, count)

    def substitute(self, idx, slot, may_take_value):
        self.body = self.body.substitute(idx + 1, slot, may_take_value)
        return self

    def _equals(self, other):
        return isinstance(other, Abstraction) and self.body == other.body

    def __repr__(self):
        return f"Abstraction({self.param!r}, {self.body!r})"
