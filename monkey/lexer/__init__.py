"""
Monkey Lexer Package

Implements the lexical analyzer (tokenizer) for the Monkey language.

Key Features:
- Single pass, one character of lookahead
- Lazy token production via next_token() or iteration
- Unknown characters become ILLEGAL tokens instead of errors
- Line/column tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, lookup_ident
from .lexer import Lexer, tokenize_string

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "lookup_ident",
    "tokenize_string",
]
