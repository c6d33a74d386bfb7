"""
Error handling for the Monkey parser.

Each problem found while parsing becomes a ParseError that is appended to
the parser's diagnostics list, and parsing carries on with the next
statement. ``Parser.parse`` itself never raises on bad input; the
convenience wrappers in ``parser.py`` raise the first error they collect.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass

from ..lexer.tokens import Token, TokenType, SourceLocation


@dataclass
class Diagnostic:
    """A single diagnostic (error, warning, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        code = f"[{self.code}]" if self.code else ""
        result = f"{severity_prefix}{code}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class ParseError(Exception):
    """
    A syntax error found while parsing.

    ``str()`` gives the one-line message; ``report()`` gives the full
    diagnostic with location, help text and suggestions.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def category(self) -> str:
        """Short description of the error code, e.g. "Unexpected token"."""
        return PARSER_ERROR_CODES.get(self.code, "Syntax error")

    def report(self) -> str:
        return str(self.diagnostic)

    def __str__(self) -> str:
        return self.message


class SyntaxErrorRecovery:
    """Suggestion helpers used when building diagnostics."""

    MISSING_TOKEN_SUGGESTIONS = {
        TokenType.RPAREN: ["Add a closing parenthesis ')'"],
        TokenType.LPAREN: ["Add an opening parenthesis '('"],
        TokenType.RBRACE: ["Add a closing brace '}'"],
        TokenType.LBRACE: ["Add an opening brace '{' to start a block"],
        TokenType.ASSIGN: ["Add an assignment operator '='"],
        TokenType.IDENT: ["Use a name made of letters, digits and '_'"],
    }

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        return list(SyntaxErrorRecovery.MISSING_TOKEN_SUGGESTIONS.get(expected, []))


# Parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P003": "Invalid integer literal",
    "P005": "Token cannot start an expression",
    "P006": "Expression nested too deeply",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: TokenType, found: Token) -> ParseError:
    """Create an error for a token that doesn't match what the grammar requires."""
    return ParseError(
        message=f'expected token {expected}, got token {found.type} ("{found.literal}")',
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position, but found {found.type} instead.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(expected)
    )


def create_no_prefix_parse_error(token: Token) -> ParseError:
    """Create an error for a token that cannot begin an expression."""
    if token.type == TokenType.ILLEGAL:
        help_text = f"The character '{token.literal}' is not valid in Monkey source code."
    else:
        help_text = f"'{token.literal}' cannot start an expression."

    return ParseError(
        message=f"no prefix parse function for {token.type} found",
        location=token.location,
        token=token,
        code="P005",
        help_text=help_text
    )


def create_invalid_integer_error(token: Token, reason: str) -> ParseError:
    """Create an error for an integer literal that doesn't fit in 64 bits."""
    return ParseError(
        message=f'could not parse "{token.literal}" as integer',
        location=token.location,
        token=token,
        code="P003",
        help_text=reason,
        suggestions=["Integer literals must fit in a signed 64-bit integer"]
    )


def create_nesting_too_deep_error(token: Token, limit: int) -> ParseError:
    """Create an error for an expression nested past the parser's depth limit."""
    return ParseError(
        message="expression nested too deeply",
        location=token.location,
        token=token,
        code="P006",
        help_text=f"Expressions may nest at most {limit} levels deep.",
        suggestions=["Bind inner parts to names with 'let' and combine those"]
    )
