"""Binder contexts: the chain of enclosing λ parameters that the parser and printer carry while walking a term.

A context is immutable and stack-shaped. Entering an abstraction pushes one link holding the parameter name, and the
link is dropped again simply by no longer referencing it once the abstraction's body is done. The De Bruijn index of a
variable is the number of hops from the innermost link to the link that binds it:

```
λa.λb.λc.(a c)       context while in the body: c -> b -> a -> ROOT
           ^ ^       'a' is 2 hops out, 'c' is 0 hops out: (2 0)
```

The reducer never consults a context; it works on indices alone.
"""


class Context:
    """One link of a binder chain. The empty chain is the module-level ROOT."""

    def __init__(self, name=None, parent=None):
        self.name = name
        self.parent = parent
        self._depth = 0 if parent is None else len(parent) + 1

    def push(self, name):
        """Returns a new context with name bound innermost. self is left untouched."""
        return Context(name, self)

    @property
    def is_root(self):
        return self.parent is None

    def get_name(self, idx):
        """Returns the name bound idx hops out. Raises IndexError if idx points past the root, which means the tree was
        built with an out-of-range index.
        """
        ctx = self
        hops = idx
        while not ctx.is_root:
            if hops == 0:
                return ctx.name
            ctx = ctx.parent
            hops -= 1
        raise IndexError(f"invalid De Bruijn index {idx} in a context of depth {len(self)}")

    def get_index(self, name):
        """Returns the hop count to the innermost link binding name, or None if name is unbound."""
        ctx = self
        idx = 0
        while not ctx.is_root:
            if ctx.name == name:
                return idx
            ctx = ctx.parent
            idx += 1
        return None

    def names(self):
        """Bound names, innermost first."""
        ctx = self
        while not ctx.is_root:
            yield ctx.name
            ctx = ctx.parent

    def fresh_name(self, name):
        """Returns name if it is unbound here, otherwise the first of name1, name2, ... that is unbound."""
        if name not in self:
            return name
        suffix = 1
        while f"{name}{suffix}" in self:
            suffix += 1
        return f"{name}{suffix}"

    def __contains__(self, name):
        return self.get_index(name) is not None

    def __len__(self):
        return self._depth

    def __repr__(self):
        return f"Context({list(self.names())})"


ROOT = Context()  # the empty chain every parse and display starts from
