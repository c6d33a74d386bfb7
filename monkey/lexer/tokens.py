"""
Token definitions for the Monkey lexer.

This module defines every token type the language knows about:
- Special tokens (end of input, illegal characters)
- Identifiers and integer literals
- Keywords
- Operators and delimiters

Author: xwest
"""

from enum import Enum
from dataclasses import dataclass, field


class TokenType(Enum):
    """
    Enumeration of all token types in Monkey.

    The value of each member is its display form, which is what
    diagnostics print (``=`` rather than ``ASSIGN``).
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    ILLEGAL = "ILLEGAL"             # Unrecognized character
    EOF = "EOF"                     # End of input

    # ========================================================================
    # Identifiers and Literals
    # ========================================================================
    IDENT = "IDENT"                 # add, foobar, x, y
    INT = "INT"                     # 1343456

    # ========================================================================
    # Keywords
    # ========================================================================
    FUNCTION = "FUNCTION"           # fn
    LET = "LET"                     # let
    TRUE = "TRUE"                   # true
    FALSE = "FALSE"                 # false
    IF = "IF"                       # if
    ELSE = "ELSE"                   # else
    RETURN = "RETURN"               # return

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"

    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # ========================================================================
    # Delimiters
    # ========================================================================
    COMMA = ","
    SEMICOLON = ";"

    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting only; it never affects how a token compares.
    """
    filename: str = "<input>"
    line: int = 1
    column: int = 1
    offset: int = 0  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    ``literal`` is always the exact source text that produced the token,
    so numeric conversion and rendering both work from it.
    """
    type: TokenType
    literal: str
    location: SourceLocation = field(default_factory=SourceLocation, compare=False)

    def __str__(self) -> str:
        return f"{self.type.name}({self.literal!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r}, {self.location!r})"

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {TokenType.INT, TokenType.TRUE, TokenType.FALSE}


# Reserved words. Anything else that looks like a word is an identifier.
KEYWORDS = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

# Single-character operators and delimiters. '=' and '!' are absent because
# they need a character of lookahead.
SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}


def lookup_ident(ident: str) -> TokenType:
    """Return the keyword type for ``ident``, or IDENT if it is not reserved."""
    return KEYWORDS.get(ident, TokenType.IDENT)
