"""Printing De Bruijn terms back to lambda calculus text that parse() reads back to the same tree.

Parenthesization is minimal:

- an abstraction is parenthesized as either side of an application: (λx.x) y, f (λx.x)
- an application is parenthesized as an argument or as an abstraction body: f (g x), λx.(f x)
- nothing is parenthesized at the top level, as a function, or as the body of an abstraction
  that is itself an abstraction: f x y, λx.λy.x

Names come from the abstractions' params. A param that is already bound further out is printed with a numeric suffix
(x, x1, x2, ...) so that every variable reads back as the binder it refers to.
"""

from debruijn.pure.context import ROOT
from debruijn.pure.expr import Abstraction, Application, Variable


def display(expr, context=ROOT):
    """Returns expr as text. context binds the free indices of expr, if any; an index that context does not bind raises
    IndexError.
    """
    return "".join(_display(expr, context, parens_for_app=False, parens_for_lambda=False))


def _display(expr, context, parens_for_app, parens_for_lambda):
    """Yields pieces of text for expr."""
    if isinstance(expr, Variable):
        yield context.get_name(expr.index)

    elif isinstance(expr, Application):
        if parens_for_app:
            yield "("
        yield from _display(expr.fun, context, parens_for_app=False, parens_for_lambda=True)
        yield " "
        yield from _display(expr.arg, context, parens_for_app=True, parens_for_lambda=True)
        if parens_for_app:
            yield ")"

    elif isinstance(expr, Abstraction):
        name = context.fresh_name(expr.param)
        if parens_for_lambda:
            yield "("
        yield f"λ{name}."
        yield from _display(expr.body, context.push(name), parens_for_app=True, parens_for_lambda=False)
        if parens_for_lambda:
            yield ")"

    else:
        raise TypeError(f"cannot display {type(expr).__name__}")
