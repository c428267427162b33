"""Recursive-descent parser from lambda calculus text to De Bruijn terms.

```
<expr>   ::= <atom>+                      ; application, associating by left: a b c = ((a b) c)
<atom>   ::= "(" <expr> ")"
           | <binder>
           | <name>                       ; must be bound by an enclosing binder
<binder> ::= ("λ" | "\\") <name>+ "." <expr>
                                          ; curried: λx y.e = λx.λy.e
                                          ; bodies are greedy: λx.x y = λx.(x y)
<name>   ::= [A-Za-z0-9_]+
```

Whitespace separates tokens and is otherwise ignored. Names are resolved against the binder context while parsing, so
the result never contains names except as display hints on abstractions. All errors are ParseErrors carrying the
position where parsing stopped and the rest of the input from there.
"""

import re

from debruijn.lang.error import GenericException
from debruijn.pure.context import ROOT
from debruijn.pure.expr import Abstraction, Application, Variable


class ParseError(GenericException):
    """Superclass of all parse errors. text is the whole input and pos the offset where parsing failed."""
    TEMPLATE = "could not parse '{}'"

    def __init__(self, text, pos, end=-1, template=None):
        self.text = text
        self.pos = pos
        self.rest = text[pos:]
        super().__init__(template or self.TEMPLATE, self._exprs(), start=pos, end=end)

    def _exprs(self):
        return [self.text, self.rest]


class UnexpectedInput(ParseError):
    """A token that cannot start an expression, or input left over after a complete expression."""
    TEMPLATE = "expected expression instead of: '{1}'"

    def __init__(self, text, pos, trailing=False):
        template = None
        if trailing:
            template = "expected expression or end of input instead of: '{1}'"
        elif pos == len(text):
            template = "expected expression instead of end of input"
        super().__init__(text, pos, template=template)


class UnresolvedVariable(ParseError):
    """A name with no enclosing binder."""
    TEMPLATE = "variable '{2}' not found"

    def __init__(self, text, pos, name):
        self.name = name
        super().__init__(text, pos, end=pos + len(name))

    def _exprs(self):
        return [self.text, self.rest, self.name]


class MissingBinderName(ParseError):
    """λ not followed by a name."""
    TEMPLATE = "expected parameter name instead of: '{1}'"


class MissingDot(ParseError):
    """Parameter list not terminated by '.'."""
    TEMPLATE = "expected '.' instead of: '{1}'"


class UnclosedGroup(ParseError):
    """'(' never matched by ')'."""
    TEMPLATE = "expected ')' instead of: '{1}'"

    def __init__(self, text, pos):
        template = "expected ')' instead of end of input" if pos == len(text) else None
        super().__init__(text, pos, template=template)


class ParserInput:
    """Cursor over the text being parsed."""
    BINDERS = ("λ", "\\")
    NAME = re.compile(r"[A-Za-z0-9_]+")

    def __init__(self, text):
        self.text = text
        self.pos = 0

    @property
    def rest(self):
        return self.text[self.pos:]

    @property
    def at_end(self):
        return self.pos == len(self.text)

    def skip_whitespace(self):
        while not self.at_end and self.text[self.pos].isspace():
            self.pos += 1

    def try_read_char(self, *chars):
        """Consumes the next char if it is one of chars."""
        if not self.at_end and self.text[self.pos] in chars:
            self.pos += 1
            return True
        return False

    def try_read_name(self):
        """Consumes and returns the next name, or returns None if there is none here."""
        match = ParserInput.NAME.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group()


class Parser:
    """Parses one piece of text. Use parse() unless you need the parser state."""

    def __init__(self, text):
        self.input = ParserInput(text)

    @property
    def text(self):
        return self.input.text

    def parse(self):
        """Parses all of the text, failing if anything but whitespace is left over."""
        expr = self.parse_expr(ROOT)
        self.input.skip_whitespace()
        if not self.input.at_end:
            raise UnexpectedInput(self.text, self.input.pos, trailing=True)
        return expr

    def parse_expr(self, context):
        """<atom>+, as a left-associated chain of applications."""
        expr = self.try_parse_atom(context)
        if expr is None:
            raise UnexpectedInput(self.text, self.input.pos)

        arg = self.try_parse_atom(context)
        while arg is not None:
            expr = Application(expr, arg)
            arg = self.try_parse_atom(context)
        return expr

    def try_parse_atom(self, context):
        """Returns the next atom, or None if the input here cannot start one."""
        source = self.input
        source.skip_whitespace()

        if source.try_read_char("("):
            expr = self.parse_expr(context)
            source.skip_whitespace()
            if not source.try_read_char(")"):
                raise UnclosedGroup(self.text, source.pos)
            return expr

        if source.try_read_char(*ParserInput.BINDERS):
            return self.parse_binder(context)

        start = source.pos
        name = source.try_read_name()
        if name is None:
            return None

        idx = context.get_index(name)
        if idx is None:
            raise UnresolvedVariable(self.text, start, name)
        return Variable(idx)

    def parse_binder(self, context):
        """<name>+ "." <expr>, after the λ has been consumed."""
        source = self.input
        params = []
        while True:
            source.skip_whitespace()
            name = source.try_read_name()
            if name is None:
                break
            params.append(name)
            context = context.push(name)

        if not params:
            raise MissingBinderName(self.text, source.pos)
        if not source.try_read_char("."):
            raise MissingDot(self.text, source.pos)

        body = self.parse_expr(context)
        for param in reversed(params):
            body = Abstraction(param, body)
        return body


def parse(text):
    """Parses text into a term. Raises a ParseError subclass if text is not a closed lambda term."""
    return Parser(text).parse()
