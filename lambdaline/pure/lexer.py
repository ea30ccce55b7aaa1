"""Lexical analysis for pure lambda calculus: turns a source line into spanned tokens.

```
<token> ::= "λ" | "." | "(" | ")" | ":="
          | <char>                        ; any other non-whitespace character is a one-character variable
```

Variables are always a single character, so `xy` is two variables and `λxy.x` binds two names. A `:` that is not
followed by `=` is not an error: it lexes as the variable named `:`. This keeps the lexer total (every non-whitespace
character starts some token), and the parser is left to reject it if it appears somewhere a variable cannot.
"""

from dataclasses import dataclass
from enum import Enum

from lambdaline.lang.error import LexError


class TokenType(Enum):
    LAMBDA = "λ"
    DOT = "."
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    ASSIGNMENT = ":="
    VARIABLE = "<variable>"


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) range of character offsets into the source."""
    start: int
    end: int


@dataclass(frozen=True)
class Token:
    type: TokenType
    span: Span
    name: str = None  # only set for VARIABLE tokens

    def __str__(self):
        return self.name if self.type is TokenType.VARIABLE else self.type.value


SINGLE = {
    "λ": TokenType.LAMBDA,
    ".": TokenType.DOT,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}


def scan(source, position):
    """Returns the first token at or after position. Raises LexError if only whitespace is left."""
    while position < len(source) and source[position].isspace():
        position += 1

    if position >= len(source):
        raise LexError(Span(len(source), len(source)))

    char = source[position]
    if char in SINGLE:
        return Token(SINGLE[char], Span(position, position + 1))
    elif source.startswith(":=", position):
        return Token(TokenType.ASSIGNMENT, Span(position, position + 2))
    return Token(TokenType.VARIABLE, Span(position, position + 1), char)


class Lexer:
    """Peekable token cursor over a source line. peek and next return None at end of input."""

    def __init__(self, source):
        self.source = source
        self._position = 0
        self._peeked = self._scan()

    def _scan(self):
        try:
            token = scan(self.source, self._position)
        except LexError:
            return None
        self._position = token.span.end
        return token

    def peek(self):
        """Returns the next token without consuming it."""
        return self._peeked

    def next(self):
        """Consumes and returns the next token."""
        token = self._peeked
        if token is not None:
            self._peeked = self._scan()
        return token

    def end_span(self):
        """Zero-width span just past the last character, used when the line ends too early."""
        return Span(len(self.source), len(self.source))

    def __iter__(self):
        while self.peek() is not None:
            yield self.next()


def tokenize(source):
    """Returns all tokens in source."""
    return list(Lexer(source))
