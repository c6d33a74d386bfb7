"""
Monkey Pratt Parser Implementation

Top-down operator precedence (Pratt) parser for Monkey. Pulls tokens from
a Lexer with one token of lookahead and builds the AST defined in
``ast_nodes``. Syntax errors are collected, not raised: a statement that
fails to parse is dropped and parsing resumes with the next one.

Author: xwest
"""

import logging
from typing import List, Optional, Dict, Callable, Tuple
from enum import IntEnum

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import Lexer
from .ast_nodes import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression,
)
from .errors import (
    ParseError, create_unexpected_token_error, create_no_prefix_parse_error,
    create_invalid_integer_error, create_nesting_too_deep_error,
)

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Each nesting level costs up to five Python frames (if -> block -> statement)
MAX_NESTING_DEPTH = 100


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    LOWEST = 1
    EQUALS = 2          # ==, !=
    LESSGREATER = 3     # <, >
    SUM = 4             # +, -
    PRODUCT = 5         # *, /
    PREFIX = 6          # -x, !x
    CALL = 7            # my_function(x)


# Operator precedence table
PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


class Parser:
    """
    Monkey Pratt parser.

    Keeps two tokens in view, ``cur_token`` and ``peek_token``. Every
    parse method starts with ``cur_token`` on the first token of its
    construct and leaves it on the last one.
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize parser over a lexer.

        Args:
            lexer: Lexer to pull tokens from; owned by this parser
        """
        self.lexer = lexer
        self.diagnostics: List[ParseError] = []

        self.cur_token: Optional[Token] = None
        self.peek_token: Optional[Token] = None

        # Expression recursion depth, and count of unclosed '(' / '{' before cur_token
        self._depth = 0
        self._brackets = 0

        self._init_parsing_tables()

        # Read two tokens so cur_token and peek_token are both set
        self._next_token()
        self._next_token()

    def _init_parsing_tables(self):
        """Initialize prefix and infix parsing function tables."""

        # Prefix parsing functions (for tokens that can start expressions)
        self.prefix_parsers: Dict[TokenType, Callable[[], Optional[Expression]]] = {
            TokenType.IDENT: self._parse_identifier,
            TokenType.INT: self._parse_integer_literal,
            TokenType.TRUE: self._parse_boolean_literal,
            TokenType.FALSE: self._parse_boolean_literal,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FUNCTION: self._parse_function_literal,
        }

        # Infix parsing functions (binary operators and calls)
        self.infix_parsers: Dict[TokenType, Callable[[Expression], Optional[Expression]]] = {
            TokenType.PLUS: self._parse_infix_expression,
            TokenType.MINUS: self._parse_infix_expression,
            TokenType.ASTERISK: self._parse_infix_expression,
            TokenType.SLASH: self._parse_infix_expression,
            TokenType.EQ: self._parse_infix_expression,
            TokenType.NOT_EQ: self._parse_infix_expression,
            TokenType.LT: self._parse_infix_expression,
            TokenType.GT: self._parse_infix_expression,
            TokenType.LPAREN: self._parse_call_expression,
        }

    @property
    def errors(self) -> List[str]:
        """Error messages collected so far, in the order they were found."""
        return [error.message for error in self.diagnostics]

    def has_errors(self) -> bool:
        """Check if parser encountered any errors."""
        return len(self.diagnostics) > 0

    def parse(self) -> Program:
        """
        Parse the token stream into an AST.

        Returns:
            Program AST node. Statements that failed to parse are left
            out; check ``errors`` to find out why.
        """
        statements: List[Statement] = []

        while not self._cur_token_is(TokenType.EOF):
            start_brackets = self._brackets
            try:
                statement = self._parse_statement()
            except ParseError as e:
                self._add_error(e)
                self._synchronize(start_brackets)
                statement = None

            if statement is not None:
                statements.append(statement)
            self._next_token()

        logger.debug("parsed %d statement(s) with %d error(s)",
                     len(statements), len(self.diagnostics))
        return Program(statements)

    parse_program = parse

    # Statements

    def _parse_statement(self) -> Optional[Statement]:
        if self.cur_token.type == TokenType.LET:
            return self._parse_let_statement()
        if self.cur_token.type == TokenType.RETURN:
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> Optional[LetStatement]:
        """Parse ``let <ident> = <expression>;``"""
        let_token = self.cur_token

        if not self._expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()

        if value is None:
            return None
        return LetStatement(let_token, name, value)

    def _parse_return_statement(self) -> Optional[ReturnStatement]:
        """Parse ``return <expression>;``"""
        return_token = self.cur_token

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()

        if value is None:
            return None
        return ReturnStatement(return_token, value)

    def _parse_expression_statement(self) -> Optional[ExpressionStatement]:
        start_token = self.cur_token

        expression = self._parse_expression(Precedence.LOWEST)

        # The semicolon is optional so one-line input like "5 + 5" works
        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()

        if expression is None:
            return None
        return ExpressionStatement(start_token, expression)

    def _parse_block_statement(self) -> BlockStatement:
        """Parse statements up to the matching '}' (or end of input)."""
        block_token = self.cur_token
        statements: List[Statement] = []

        self._next_token()

        while not self._cur_token_is(TokenType.RBRACE) and not self._cur_token_is(TokenType.EOF):
            statement = self._parse_statement()
            if statement is not None:
                statements.append(statement)
            self._next_token()

        return BlockStatement(block_token, statements)

    # Expressions

    def _parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """
        Parse expression whose operators all bind tighter than ``precedence``.

        Raises:
            ParseError: When nesting exceeds MAX_NESTING_DEPTH; ``parse``
                drops the whole enclosing top-level statement
        """
        prefix_parser = self.prefix_parsers.get(self.cur_token.type)
        if prefix_parser is None:
            self._add_error(create_no_prefix_parse_error(self.cur_token))
            return None

        if self._depth >= MAX_NESTING_DEPTH:
            raise create_nesting_too_deep_error(self.cur_token, MAX_NESTING_DEPTH)

        self._depth += 1
        try:
            left = prefix_parser()

            while (left is not None
                   and not self._peek_token_is(TokenType.SEMICOLON)
                   and precedence < self._peek_precedence()):
                infix_parser = self.infix_parsers.get(self.peek_token.type)
                if infix_parser is None:
                    return left

                self._next_token()
                left = infix_parser(left)

            return left
        finally:
            self._depth -= 1

    # Prefix parsers (tokens that can start expressions)

    def _parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def _parse_integer_literal(self) -> Optional[IntegerLiteral]:
        """Parse integer literal, rejecting anything outside signed 64-bit."""
        token = self.cur_token
        literal = token.literal

        try:
            if literal[:2].lower() in ("0x", "0o", "0b"):
                value = int(literal, 0)
            elif literal.isascii() and literal.isdigit():
                value = int(literal, 10)
            else:
                raise ValueError(f"invalid syntax in {literal!r}")
        except ValueError as e:
            self._add_error(create_invalid_integer_error(token, str(e)))
            return None

        if not INT64_MIN <= value <= INT64_MAX:
            self._add_error(create_invalid_integer_error(token, "value out of range"))
            return None

        return IntegerLiteral(token, value)

    def _parse_boolean_literal(self) -> BooleanLiteral:
        return BooleanLiteral(self.cur_token, self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Optional[PrefixExpression]:
        """Parse ``!x`` or ``-x``."""
        operator_token = self.cur_token

        self._next_token()
        right = self._parse_expression(Precedence.PREFIX)
        if right is None:
            return None

        return PrefixExpression(operator_token, operator_token.literal, right)

    def _parse_grouped_expression(self) -> Optional[Expression]:
        """Parse parenthesized expression."""
        self._next_token()

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if not self._expect_peek(TokenType.RPAREN):
            return None

        return expression

    def _parse_if_expression(self) -> Optional[IfExpression]:
        """Parse ``if (<cond>) { ... } else { ... }``."""
        if_token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None

        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self._expect_peek(TokenType.RPAREN):
            return None
        if not self._expect_peek(TokenType.LBRACE):
            return None

        consequence = self._parse_block_statement()

        alternative = None
        if self._peek_token_is(TokenType.ELSE):
            self._next_token()

            if not self._expect_peek(TokenType.LBRACE):
                return None

            alternative = self._parse_block_statement()

        return IfExpression(if_token, condition, consequence, alternative)

    def _parse_function_literal(self) -> Optional[FunctionLiteral]:
        """Parse ``fn(<params>) { <body> }``."""
        fn_token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None

        parameters = self._parse_function_parameters()
        if parameters is None:
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None

        body = self._parse_block_statement()

        return FunctionLiteral(fn_token, parameters, body)

    def _parse_function_parameters(self) -> Optional[List[Identifier]]:
        """Parse a possibly empty, comma-separated identifier list ending in ')'."""
        parameters: List[Identifier] = []

        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return parameters

        if not self._expect_peek(TokenType.IDENT):
            return None
        parameters.append(Identifier(self.cur_token, self.cur_token.literal))

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            parameters.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self._expect_peek(TokenType.RPAREN):
            return None

        return parameters

    # Infix parsers (binary operators and calls)

    def _parse_infix_expression(self, left: Expression) -> Optional[InfixExpression]:
        """Parse binary operation."""
        operator_token = self.cur_token

        # Same precedence for the right side, not one higher: an operator
        # of equal precedence then ends the right operand, so chains fold left
        precedence = self._cur_precedence()
        self._next_token()
        right = self._parse_expression(precedence)
        if right is None:
            return None

        return InfixExpression(operator_token, left, operator_token.literal, right)

    def _parse_call_expression(self, function: Expression) -> Optional[CallExpression]:
        """Parse function call; ``cur_token`` is the '('."""
        call_token = self.cur_token

        arguments = self._parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None

        return CallExpression(call_token, function, arguments)

    def _parse_expression_list(self, end: TokenType) -> Optional[List[Expression]]:
        """Parse a possibly empty, comma-separated expression list ending in ``end``."""
        items: List[Expression] = []

        if self._peek_token_is(end):
            self._next_token()
            return items

        self._next_token()
        item = self._parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            item = self._parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self._expect_peek(end):
            return None

        return items

    # Utility methods

    def _next_token(self):
        if self.cur_token is not None:
            if self.cur_token.type in (TokenType.LPAREN, TokenType.LBRACE):
                self._brackets += 1
            elif self.cur_token.type in (TokenType.RPAREN, TokenType.RBRACE):
                self._brackets -= 1

        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _synchronize(self, brackets: int):
        """
        Skip the rest of a statement that began with ``brackets`` open.

        Stops on the ';' or '}' that ends it, or just before EOF, so the
        caller's ``_next_token`` moves on to the following statement.
        """
        while not self._peek_token_is(TokenType.EOF):
            if self._cur_token_is(TokenType.SEMICOLON) and self._brackets <= brackets:
                return
            # A closing brace is still counted as open while it is cur_token
            if (self._cur_token_is(TokenType.RBRACE) and self._brackets <= brackets + 1
                    and not self._peek_token_is(TokenType.ELSE)):
                return
            self._next_token()

    def _cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type == token_type

    def _peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def _expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the next token has the expected type, else record an error."""
        if self._peek_token_is(token_type):
            self._next_token()
            return True

        self._add_error(create_unexpected_token_error(token_type, self.peek_token))
        return False

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def _add_error(self, error: ParseError):
        logger.debug("parse error at %s: %s", error.location, error.message)
        self.diagnostics.append(error)


def parse(source: str, filename: str = "<input>") -> Tuple[Program, List[str]]:
    """
    Parse source text.

    Args:
        source: Source code string
        filename: Filename for error locations

    Returns:
        (program, errors); errors is empty for well-formed input
    """
    parser = Parser(Lexer(source, filename))
    program = parser.parse()
    return program, parser.errors


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        Program AST

    Raises:
        ParseError: The first error, if parsing found any
    """
    parser = Parser(Lexer(source, filename))
    program = parser.parse()

    if parser.has_errors():
        raise parser.diagnostics[0]

    return program


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Args:
        filepath: Path to source file

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
