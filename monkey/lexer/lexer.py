"""
Monkey Lexer - turns source text into tokens, one at a time.

Single pass, one character of lookahead. Nothing here ever raises:
characters the language doesn't know come out as ILLEGAL tokens and the
parser decides what to say about them.

xwest
"""

import string
from typing import Iterator, List

from .tokens import Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS, lookup_ident


WHITESPACE = frozenset(" \t\n\r")
IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CONTINUE = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)


class Lexer:
    """
    Monkey lexical analyzer.

    Call ``next_token()`` repeatedly; once the input is exhausted every
    further call returns an EOF token without moving.
    """

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source for error locations
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily, up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source.

        Returns:
            List of tokens ending with a single EOF token
        """
        return list(self)

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace()

        location = self._location()
        char = self._current()

        if char == "":
            return Token(TokenType.EOF, "", location)

        if char in IDENT_START:
            literal = self._read_while(IDENT_CONTINUE)
            return Token(lookup_ident(literal), literal, location)

        if char in DIGITS:
            return Token(TokenType.INT, self._read_while(DIGITS), location)

        # Two-character operators need the lookahead
        if char == "=":
            if self._peek() == "=":
                self._advance_by(2)
                return Token(TokenType.EQ, "==", location)
            self._advance()
            return Token(TokenType.ASSIGN, "=", location)

        if char == "!":
            if self._peek() == "=":
                self._advance_by(2)
                return Token(TokenType.NOT_EQ, "!=", location)
            self._advance()
            return Token(TokenType.BANG, "!", location)

        self._advance()
        token_type = SINGLE_CHAR_TOKENS.get(char, TokenType.ILLEGAL)
        return Token(token_type, char, location)

    def _read_while(self, allowed: frozenset) -> str:
        """Consume a maximal run of characters from ``allowed``."""
        start_pos = self.pos
        while self._current() != "" and self._current() in allowed:
            self._advance()
        return self.source[start_pos:self.pos]

    def _skip_whitespace(self):
        while self._current() != "" and self._current() in WHITESPACE:
            self._advance()

    def _current(self) -> str:
        """Return the current character, or '' at end of input."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return ""

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        for _ in range(count):
            self._advance()

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error locations

    Returns:
        List of tokens, EOF last
    """
    return Lexer(source, filename).tokenize()
