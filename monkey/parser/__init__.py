"""
Monkey Parser Package

Implements a Pratt-based recursive descent parser for the Monkey language.

Key Features:
- Top-down operator precedence (Pratt parsing)
- Left-associative binary operators, calls as the tightest infix operator
- AST nodes that render back to canonical text
- Diagnostics collected per statement instead of raised

Author: xwest
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, TreePrinter, dump_tree,
    Program, Statement, Expression,
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression,
    InfixExpression, IfExpression, FunctionLiteral, CallExpression,
)
from .parser import Parser, Precedence, MAX_NESTING_DEPTH, parse, parse_string, parse_file
from .errors import ParseError, Diagnostic, PARSER_ERROR_CODES

__all__ = [
    # Core parser
    "Parser", "Precedence", "MAX_NESTING_DEPTH", "parse", "parse_string", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "TreePrinter", "dump_tree",
    "Program", "Statement", "Expression",
    "LetStatement", "ReturnStatement", "ExpressionStatement", "BlockStatement",
    "Identifier", "IntegerLiteral", "BooleanLiteral", "PrefixExpression",
    "InfixExpression", "IfExpression", "FunctionLiteral", "CallExpression",

    # Error handling
    "ParseError", "Diagnostic", "PARSER_ERROR_CODES",
]
