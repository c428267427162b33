"""Step-limited β/η reduction of De Bruijn terms.

Every node is checked for a redex of its own before its children are visited:

- Application: β-reduce if fun is an abstraction, otherwise reduce fun, then arg.
- Abstraction: η-reduce if the body is (f 0) with f not referencing the binder, otherwise reduce the body.
- Variable: nothing to do.

After any child made progress the node is checked again, since e.g. reducing fun can turn it into an abstraction.
Reduction of a term without a normal form never finishes on its own, so the step limit is the only termination
guarantee. A caller can tell the three outcomes apart:

```
reduce() -> False                       already in normal form (or the limit was 0 to begin with)
reduce() -> True, limit.remaining > 0   reached normal form
reduce() -> True, limit.remaining == 0  limit exhausted, maybe not in normal form
```
"""

from debruijn.pure.expr import Abstraction, Application


class StepLimit:
    """Remaining number of β/η steps. Shared by the whole walk of one reduce call and decremented once per step."""

    def __init__(self, steps):
        if steps < 0:
            raise ValueError(f"step limit must be non-negative, got {steps}")
        self.remaining = steps

    def consume(self):
        self.remaining -= 1

    @property
    def exhausted(self):
        return self.remaining == 0

    def __bool__(self):
        return self.remaining > 0

    def __repr__(self):
        return f"StepLimit({self.remaining})"


def as_step_limit(limit):
    """Returns limit as a StepLimit. ints are wrapped; anything else raises TypeError."""
    if isinstance(limit, StepLimit):
        return limit
    if isinstance(limit, int) and not isinstance(limit, bool):
        return StepLimit(limit)
    raise TypeError(f"step limit must be a StepLimit or an int, got {type(limit).__name__}")


class NormalOrderReducer:
    """Owns a tree and reduces it in place. Used so that a redex at the root can replace the whole tree."""

    def __init__(self, tree):
        self.tree = tree
        self.steps = 0  # total steps taken over all reduce calls

    def reduce(self, limit):
        """Reduces self.tree using at most limit.remaining steps. Returns whether any step was taken.

        limit is normally a StepLimit shared with the caller. A plain int is accepted too and wrapped in a StepLimit of
        its own, in which case the caller has no view of the remaining steps apart from self.steps.
        """
        limit = as_step_limit(limit)
        before = limit.remaining
        self.tree, reduced = _reduce(self.tree, limit)
        self.steps += before - limit.remaining
        return reduced

    def __repr__(self):
        return f"NormalOrderReducer({self.tree!r})"

    def __str__(self):
        return str(self.tree)


def _reduce(tree, limit):
    """Returns (replacement for tree, whether a step was taken)."""
    reduced = False
    while limit:
        if isinstance(tree, Application):
            beta_reduced = tree.try_beta_reduce()
            if beta_reduced is not None:
                tree = beta_reduced
                limit.consume()
                reduced = True
                continue

            tree.fun, fun_reduced = _reduce(tree.fun, limit)
            if fun_reduced:
                reduced = True
                continue
            tree.arg, arg_reduced = _reduce(tree.arg, limit)
            if arg_reduced:
                reduced = True
                continue

        elif isinstance(tree, Abstraction):
            eta_reduced = tree.try_eta_reduce()
            if eta_reduced is not None:
                tree = eta_reduced
                limit.consume()
                reduced = True
                continue

            tree.body, body_reduced = _reduce(tree.body, limit)
            if body_reduced:
                reduced = True
                continue

        break
    return tree, reduced


def reduce(tree, limit):
    """Functional front for NormalOrderReducer: returns (reduced tree, whether any step was taken)."""
    reducer = NormalOrderReducer(tree)
    reduced = reducer.reduce(limit)
    return reducer.tree, reduced
