"""
Monkey Front End Package

Tokenizer and Pratt parser for Monkey, a small dynamically-typed, C-like
expression language. Produces a syntax tree for later stages (evaluator,
compiler, formatter) and reports syntax errors as a list of diagnostics.

Architecture:
    monkey/
    ├── lexer/           # Tokenization
    ├── parser/          # Syntax analysis and AST generation
    └── repl.py          # Line-oriented interactive shell

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@monkeylang.org"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType
from .parser import Parser, ParseError, Program, parse, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "ParseError",
    "Program",

    # Entry points
    "parse",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
