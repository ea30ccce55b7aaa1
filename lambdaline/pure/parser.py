"""Recursive-descent parser for pure lambda calculus. Produces a raw expression tree, which pure.binder turns into IR.

```
<expression> ::= <atom> (<atom> | <lambda>)*   ; application, associating by left: abcd = (((a b) c) d)
<lambda>     ::= "λ" <name>+ "." <expression>  ; λxy.M is λx.λy.M; bodies are greedy: λx.x y = λx.(x y)
<atom>       ::= <name> | "(" <expression> ")" | <lambda>
```

A lambda met after an expression is applied to it, so `f λx.x y` is `f (λx.(x y))`. At top level the end of input
ends an expression; inside parentheses it is an error whose found token is END_OF_STRING.
"""

from dataclasses import dataclass

from lambdaline.lang.error import END_OF_STRING, ParseError
from lambdaline.pure.lexer import Lexer, TokenType


@dataclass(frozen=True)
class Variable:
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Application:
    first: object
    second: object

    def __str__(self):
        return f"({self.first} {self.second})"


@dataclass(frozen=True)
class Function:
    param: str
    body: object

    def __str__(self):
        return f"(λ{self.param}.{self.body})"


class Parser:
    """Owns the Lexer cursor that expression and function parsing share."""

    def __init__(self, source):
        self.lexer = Lexer(source)

    def _error(self, expected, token):
        if token is None:
            return ParseError(expected, END_OF_STRING, self.lexer.end_span())
        return ParseError(expected, token, token.span)

    def expression(self, in_parens=False):
        """Parses an expression. If in_parens, the closing paren is consumed."""
        token = self.lexer.next()
        if token is None or token.type in (TokenType.DOT, TokenType.ASSIGNMENT, TokenType.RIGHT_PAREN):
            raise self._error("expression", token)

        if token.type is TokenType.LAMBDA:
            head = self.function()
        elif token.type is TokenType.LEFT_PAREN:
            head = self.expression(in_parens=True)
        else:
            head = Variable(token.name)

        return self.application(head, in_parens)

    def application(self, head, in_parens=False):
        """Applies head to every following atom, left to right."""
        while True:
            token = self.lexer.peek()
            if token is None:
                if in_parens:
                    raise self._error("`)` or expression", token)
                return head

            if token.type in (TokenType.DOT, TokenType.ASSIGNMENT):
                raise self._error("`)` or expression", token)

            if token.type is TokenType.RIGHT_PAREN:
                # a stray ")" at top level is left for finish() to report
                if in_parens:
                    self.lexer.next()
                return head

            self.lexer.next()
            if token.type is TokenType.LAMBDA:
                head = Application(head, self.function())
            elif token.type is TokenType.LEFT_PAREN:
                head = Application(head, self.expression(in_parens=True))
            else:
                head = Application(head, Variable(token.name))

    def function(self):
        """Parses the rest of a function after its "λ"."""
        token = self.lexer.next()
        if token is None or token.type is not TokenType.VARIABLE:
            raise self._error("variable binding", token)
        param = token.name

        token = self.lexer.peek()
        if token is not None and token.type is TokenType.VARIABLE:
            return Function(param, self.function())
        elif token is None or token.type is not TokenType.DOT:
            raise self._error("`.` or variable binding", token)

        self.lexer.next()
        return Function(param, self.expression())

    def finish(self):
        """Raises if any tokens are left over."""
        token = self.lexer.next()
        if token is not None:
            raise ParseError("end of input", token, token.span)


def parse(source):
    """Parses a whole source line as a single expression."""
    parser = Parser(source)
    tree = parser.expression()
    parser.finish()
    return tree
