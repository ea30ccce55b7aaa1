"""Line grammar for lambdaline, a shallow wrapper around pure lambda calculus.

```
<line>       ::= <named_func> | <exec_stmt> | ""
<named_func> ::= <name> ":=" <λ-term>      ; stores the normal form of <λ-term> under <name>
<exec_stmt>  ::= <λ-term>                  ; evaluated and printed
```

`:=` is only legal directly after a single leading name, so `x := y` is a NamedFunc but `x y := z` is a ParseError.
"""

from dataclasses import dataclass

from lambdaline.pure import ir
from lambdaline.pure.lexer import TokenType
from lambdaline.pure.parser import Parser, Variable
from lambdaline.pure.printer import render


class Line:
    """Superclass for lines. term is a raw parse tree straight out of parse_line, IR after evaluation."""

    @staticmethod
    def show(term):
        return render(term) if isinstance(term, ir.Term) else str(term)


@dataclass(frozen=True)
class EmptyStmt(Line):

    def __str__(self):
        return ""


@dataclass(frozen=True)
class ExecStmt(Line):
    term: object

    def __str__(self):
        return Line.show(self.term)


@dataclass(frozen=True)
class NamedFunc(Line):
    name: str
    term: object

    def __str__(self):
        return f"{self.name} := {Line.show(self.term)}"


def parse_line(source):
    """Parses one line of source into an EmptyStmt, ExecStmt, or NamedFunc."""
    parser = Parser(source)
    lexer = parser.lexer

    token = lexer.peek()
    if token is None:
        return EmptyStmt()

    if token.type is not TokenType.VARIABLE:
        stmt = ExecStmt(parser.expression())
    else:
        lexer.next()
        if lexer.peek() is not None and lexer.peek().type is TokenType.ASSIGNMENT:
            lexer.next()
            stmt = NamedFunc(token.name, parser.expression())
        else:
            stmt = ExecStmt(parser.application(Variable(token.name)))

    parser.finish()
    return stmt
