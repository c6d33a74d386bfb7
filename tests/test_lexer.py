"""
Tests for the Monkey token model and lexer.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from monkey.lexer import Lexer, Token, TokenType, SourceLocation, lookup_ident, tokenize_string


class TestTokens(unittest.TestCase):
    """Keyword lookup and token value semantics."""

    def test_lookup_ident(self):
        cases = [
            ("fn", TokenType.FUNCTION),
            ("let", TokenType.LET),
            ("true", TokenType.TRUE),
            ("false", TokenType.FALSE),
            ("if", TokenType.IF),
            ("else", TokenType.ELSE),
            ("return", TokenType.RETURN),
            ("xyzzy", TokenType.IDENT),
            ("Let", TokenType.IDENT),
        ]
        for ident, expected in cases:
            with self.subTest(ident=ident):
                self.assertEqual(lookup_ident(ident), expected)

    def test_token_equality_ignores_location(self):
        a = Token(TokenType.ASSIGN, "=", SourceLocation("a.mk", 3, 7, 20))
        b = Token(TokenType.ASSIGN, "=")
        self.assertEqual(a, b)
        self.assertNotEqual(a, Token(TokenType.EQ, "=="))

    def test_token_is_immutable(self):
        token = Token(TokenType.IDENT, "x")
        with self.assertRaises(AttributeError):
            token.literal = "y"

    def test_display_values(self):
        self.assertEqual(str(TokenType.ASSIGN), "=")
        self.assertEqual(str(TokenType.INT), "INT")
        self.assertEqual(str(TokenType.NOT_EQ), "!=")

    def test_keyword_and_literal_flags(self):
        self.assertTrue(Token(TokenType.LET, "let").is_keyword)
        self.assertFalse(Token(TokenType.IDENT, "x").is_keyword)
        self.assertTrue(Token(TokenType.INT, "5").is_literal)
        self.assertTrue(Token(TokenType.FALSE, "false").is_literal)


class TestLexer(unittest.TestCase):
    """Test cases for next_token()."""

    def _assert_tokens(self, source, expected):
        lexer = Lexer(source)
        for i, (token_type, literal) in enumerate(expected):
            token = lexer.next_token()
            self.assertEqual(token.type, token_type, f"token {i}: {token}")
            self.assertEqual(token.literal, literal, f"token {i}: {token}")

    def test_delimiters(self):
        self._assert_tokens("=+(){},;", [
            (TokenType.ASSIGN, "="),
            (TokenType.PLUS, "+"),
            (TokenType.LPAREN, "("),
            (TokenType.RPAREN, ")"),
            (TokenType.LBRACE, "{"),
            (TokenType.RBRACE, "}"),
            (TokenType.COMMA, ","),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, ""),
        ])

    def test_program(self):
        source = """let five = 5;
let ten = 10;

let add = fn(x, y) {
  x + y;
};

let result = add(five, ten);
!-/*5;
5 < 10 > 5;

if (5 < 10) {
    return true;
} else {
    return false;
}

10 == 10;
10 != 9;
"""
        self._assert_tokens(source, [
            (TokenType.LET, "let"),
            (TokenType.IDENT, "five"),
            (TokenType.ASSIGN, "="),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"),
            (TokenType.IDENT, "ten"),
            (TokenType.ASSIGN, "="),
            (TokenType.INT, "10"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"),
            (TokenType.IDENT, "add"),
            (TokenType.ASSIGN, "="),
            (TokenType.FUNCTION, "fn"),
            (TokenType.LPAREN, "("),
            (TokenType.IDENT, "x"),
            (TokenType.COMMA, ","),
            (TokenType.IDENT, "y"),
            (TokenType.RPAREN, ")"),
            (TokenType.LBRACE, "{"),
            (TokenType.IDENT, "x"),
            (TokenType.PLUS, "+"),
            (TokenType.IDENT, "y"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.RBRACE, "}"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"),
            (TokenType.IDENT, "result"),
            (TokenType.ASSIGN, "="),
            (TokenType.IDENT, "add"),
            (TokenType.LPAREN, "("),
            (TokenType.IDENT, "five"),
            (TokenType.COMMA, ","),
            (TokenType.IDENT, "ten"),
            (TokenType.RPAREN, ")"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.BANG, "!"),
            (TokenType.MINUS, "-"),
            (TokenType.SLASH, "/"),
            (TokenType.ASTERISK, "*"),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "5"),
            (TokenType.LT, "<"),
            (TokenType.INT, "10"),
            (TokenType.GT, ">"),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.IF, "if"),
            (TokenType.LPAREN, "("),
            (TokenType.INT, "5"),
            (TokenType.LT, "<"),
            (TokenType.INT, "10"),
            (TokenType.RPAREN, ")"),
            (TokenType.LBRACE, "{"),
            (TokenType.RETURN, "return"),
            (TokenType.TRUE, "true"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.RBRACE, "}"),
            (TokenType.ELSE, "else"),
            (TokenType.LBRACE, "{"),
            (TokenType.RETURN, "return"),
            (TokenType.FALSE, "false"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.RBRACE, "}"),
            (TokenType.INT, "10"),
            (TokenType.EQ, "=="),
            (TokenType.INT, "10"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "10"),
            (TokenType.NOT_EQ, "!="),
            (TokenType.INT, "9"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, ""),
        ])

    def test_identifiers_with_underscores_and_digits(self):
        self._assert_tokens("_tmp foo_bar2 x1y", [
            (TokenType.IDENT, "_tmp"),
            (TokenType.IDENT, "foo_bar2"),
            (TokenType.IDENT, "x1y"),
            (TokenType.EOF, ""),
        ])

    def test_number_then_identifier(self):
        """A digit run stops at the first non-digit."""
        self._assert_tokens("123abc", [
            (TokenType.INT, "123"),
            (TokenType.IDENT, "abc"),
            (TokenType.EOF, ""),
        ])

    def test_illegal_characters(self):
        self._assert_tokens("a @ b $ é", [
            (TokenType.IDENT, "a"),
            (TokenType.ILLEGAL, "@"),
            (TokenType.IDENT, "b"),
            (TokenType.ILLEGAL, "$"),
            (TokenType.ILLEGAL, "é"),
            (TokenType.EOF, ""),
        ])

    def test_whitespace_kinds(self):
        self._assert_tokens(" \t\r\n x \r\n", [
            (TokenType.IDENT, "x"),
            (TokenType.EOF, ""),
        ])

    def test_eof_is_idempotent(self):
        lexer = Lexer("x")
        self.assertEqual(lexer.next_token().type, TokenType.IDENT)
        for _ in range(5):
            token = lexer.next_token()
            self.assertEqual(token.type, TokenType.EOF)
            self.assertEqual(token.literal, "")
        self.assertEqual(lexer.pos, 1)

    def test_empty_source(self):
        self.assertEqual(Lexer("").next_token().type, TokenType.EOF)

    def test_tokenize_ends_with_single_eof(self):
        tokens = tokenize_string("let x = 1;")
        self.assertEqual([t.type for t in tokens], [
            TokenType.LET, TokenType.IDENT, TokenType.ASSIGN,
            TokenType.INT, TokenType.SEMICOLON, TokenType.EOF,
        ])

    def test_iteration_is_lazy(self):
        lexer = Lexer("a b c")
        iterator = iter(lexer)
        self.assertEqual(next(iterator).literal, "a")
        self.assertEqual(lexer.pos, 1)

    def test_locations(self):
        tokens = Lexer("let x\n  = 10;", "prog.mk").tokenize()
        self.assertEqual(tokens[0].location, SourceLocation("prog.mk", 1, 1, 0))
        self.assertEqual(tokens[1].location, SourceLocation("prog.mk", 1, 5, 4))
        self.assertEqual(tokens[2].location, SourceLocation("prog.mk", 2, 3, 8))
        self.assertEqual(tokens[3].location.column, 5)
        self.assertEqual(str(tokens[3].location), "prog.mk:2:5")


if __name__ == '__main__':
    unittest.main()
