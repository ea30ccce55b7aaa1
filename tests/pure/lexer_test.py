import unittest

from lambdaline.lang.error import LexError
from lambdaline.pure.lexer import Lexer, Span, Token, TokenType, scan, tokenize


class ScanTestCase(unittest.TestCase):

    def test_scan(self):
        should_raise = [("", 0), ("   ", 0), ("x", 1), ("x  \t", 1)]
        for source, position in should_raise:
            self.assertRaises(LexError, scan, source, position)

        cases = {
            ("λx.x", 0): Token(TokenType.LAMBDA, Span(0, 1)),
            ("λx.x", 1): Token(TokenType.VARIABLE, Span(1, 2), "x"),
            ("λx.x", 2): Token(TokenType.DOT, Span(2, 3)),
            ("  (", 0): Token(TokenType.LEFT_PAREN, Span(2, 3)),
            (")", 0): Token(TokenType.RIGHT_PAREN, Span(0, 1)),
            ("x := y", 1): Token(TokenType.ASSIGNMENT, Span(2, 4)),
            (":x", 0): Token(TokenType.VARIABLE, Span(0, 1), ":"),
            (": =", 0): Token(TokenType.VARIABLE, Span(0, 1), ":"),
            ("=", 0): Token(TokenType.VARIABLE, Span(0, 1), "="),
        }
        for (source, position), expected in cases.items():
            self.assertEqual(expected, scan(source, position), source)

    def test_lex_error_span(self):
        with self.assertRaises(LexError) as context:
            scan("ab  ", 2)
        self.assertEqual(Span(4, 4), context.exception.span)


class LexerTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "": [],
            "λx.x": [TokenType.LAMBDA, TokenType.VARIABLE, TokenType.DOT, TokenType.VARIABLE],
            "x := (y)": [TokenType.VARIABLE, TokenType.ASSIGNMENT, TokenType.LEFT_PAREN, TokenType.VARIABLE,
                         TokenType.RIGHT_PAREN],
            "xyz": [TokenType.VARIABLE] * 3,
            "a:b": [TokenType.VARIABLE] * 3,
        }
        for source, expected in cases.items():
            self.assertEqual(expected, [token.type for token in tokenize(source)], source)

    def test_spans(self):
        spans = [token.span for token in tokenize(" x := λy.y ")]
        self.assertEqual([Span(1, 2), Span(3, 5), Span(6, 7), Span(7, 8), Span(8, 9), Span(9, 10)], spans)

    def test_peek(self):
        lexer = Lexer("x y")
        self.assertIs(lexer.peek(), lexer.peek())

        first = lexer.peek()
        self.assertIs(first, lexer.next())
        self.assertEqual("y", lexer.next().name)

        self.assertIsNone(lexer.peek())
        self.assertIsNone(lexer.next())
        self.assertIsNone(lexer.next())

    def test_end_span(self):
        self.assertEqual(Span(5, 5), Lexer("λx.x ").end_span())

    def test_str(self):
        self.assertEqual(["λ", "x", ".", "(", ")", ":="], [str(token) for token in tokenize("λx.():=")])


if __name__ == '__main__':
    unittest.main()
