"""
Tests for AST node rendering, traversal and the tree dump.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from monkey.lexer import Token, TokenType
from monkey.parser import (
    ASTNodeType, ASTVisitor, dump_tree, parse,
    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression,
    InfixExpression, IfExpression, FunctionLiteral, CallExpression,
)


def tok(token_type: TokenType, literal: str) -> Token:
    return Token(token_type, literal)


def ident(name: str) -> Identifier:
    return Identifier(tok(TokenType.IDENT, name), name)


def integer(value: int) -> IntegerLiteral:
    return IntegerLiteral(tok(TokenType.INT, str(value)), value)


class TestRendering(unittest.TestCase):
    """Nodes built by hand render to canonical text."""

    def test_let_statement(self):
        program = Program([
            LetStatement(tok(TokenType.LET, "let"), ident("myVar"), ident("anotherVar")),
        ])
        self.assertEqual(str(program), "let myVar = anotherVar;")

    def test_return_statement(self):
        statement = ReturnStatement(tok(TokenType.RETURN, "return"), integer(5))
        self.assertEqual(str(statement), "return 5;")

    def test_prefix_and_infix(self):
        expression = InfixExpression(
            tok(TokenType.ASTERISK, "*"),
            PrefixExpression(tok(TokenType.MINUS, "-"), "-", ident("a")),
            "*",
            ident("b"),
        )
        self.assertEqual(str(expression), "((-a) * b)")

    def test_boolean(self):
        self.assertEqual(str(BooleanLiteral(tok(TokenType.TRUE, "true"), True)), "true")

    def test_blocks(self):
        empty = BlockStatement(tok(TokenType.LBRACE, "{"), [])
        self.assertEqual(str(empty), "{ }")

        block = BlockStatement(tok(TokenType.LBRACE, "{"), [
            LetStatement(tok(TokenType.LET, "let"), ident("a"), integer(1)),
            ExpressionStatement(tok(TokenType.IDENT, "a"), ident("a")),
        ])
        self.assertEqual(str(block), "{ let a = 1; a }")

    def test_if_function_and_call(self):
        body = BlockStatement(tok(TokenType.LBRACE, "{"), [
            ExpressionStatement(tok(TokenType.IDENT, "x"), ident("x")),
        ])
        if_expression = IfExpression(tok(TokenType.IF, "if"), ident("c"), body, body)
        self.assertEqual(str(if_expression), "if (c) { x } else { x }")

        function = FunctionLiteral(tok(TokenType.FUNCTION, "fn"), [ident("x"), ident("y")], body)
        self.assertEqual(str(function), "fn(x, y) { x }")

        call = CallExpression(tok(TokenType.LPAREN, "("), ident("f"), [integer(1), ident("z")])
        self.assertEqual(str(call), "f(1, z)")

    def test_sequences_are_frozen(self):
        statements = [ExpressionStatement(tok(TokenType.INT, "1"), integer(1))]
        program = Program(statements)
        statements.append(ExpressionStatement(tok(TokenType.INT, "2"), integer(2)))
        self.assertEqual(len(program.statements), 1)
        self.assertIsInstance(program.statements, tuple)


class TestLongChains(unittest.TestCase):
    """Left-folded chains render regardless of their length."""

    def test_long_sum(self):
        program, errors = parse(" + ".join(["1"] * 3000))
        self.assertEqual(errors, [])
        text = str(program)
        self.assertTrue(text.startswith("(" * 2999 + "1 + 1)"))
        self.assertTrue(text.endswith(" + 1)" * 2998))

    def test_long_call_chain(self):
        program, errors = parse("f" + "(x)" * 3000)
        self.assertEqual(errors, [])
        self.assertEqual(str(program), "f" + "(x)" * 3000)

    def test_mixed_chain(self):
        program, errors = parse("a + f(1)(2) * 3 - g(b)")
        self.assertEqual(errors, [])
        self.assertEqual(str(program), "((a + (f(1)(2) * 3)) - g(b))")


class TestTraversal(unittest.TestCase):

    def test_children_in_source_order(self):
        program, _ = parse("let f = fn(a, b) { a }; f(1, 2)")
        let_statement, call_statement = program.statements
        self.assertEqual(let_statement.children()[0], ident("f"))
        function = let_statement.value
        self.assertEqual([str(c) for c in function.children()], ["a", "b", "{ a }"])
        call = call_statement.expression
        self.assertEqual([str(c) for c in call.children()], ["f", "1", "2"])

    def test_if_children_skip_missing_alternative(self):
        program, _ = parse("if (x) { y }")
        expression = program.statements[0].expression
        self.assertEqual(len(expression.children()), 2)

    def test_visitor_dispatch(self):
        class IdentifierCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_identifier(self, node):
                self.names.append(node.value)

        program, _ = parse("let x = add(y, -z) + fn(w) { w * 2 }(1);")
        collector = IdentifierCollector()
        program.accept(collector)
        self.assertEqual(collector.names, ["x", "add", "y", "z", "w", "w"])

    def test_node_types(self):
        program, _ = parse("!true")
        expression = program.statements[0].expression
        self.assertEqual(program.node_type, ASTNodeType.PROGRAM)
        self.assertEqual(expression.node_type, ASTNodeType.PREFIX_EXPRESSION)
        self.assertEqual(expression.right.node_type, ASTNodeType.BOOLEAN_LITERAL)


class TestDumpTree(unittest.TestCase):

    def test_dump(self):
        program, _ = parse("let x = -1 + y;")
        self.assertEqual(dump_tree(program), "\n".join([
            "Program",
            "  LetStatement",
            "    Identifier x",
            "    InfixExpression +",
            "      PrefixExpression -",
            "        IntegerLiteral 1",
            "      Identifier y",
        ]))

    def test_dump_long_chain(self):
        program, _ = parse(" + ".join(["1"] * 3000))
        lines = dump_tree(program).split("\n")
        self.assertEqual(len(lines), 2 + 2999 + 3000)
        self.assertEqual(lines[2], "    InfixExpression +")
        self.assertEqual(lines[-1], "      IntegerLiteral 1")
        self.assertEqual(lines[-2], "        IntegerLiteral 1")

    def test_dump_if(self):
        program, _ = parse("if (true) { } else { f() }")
        self.assertEqual(dump_tree(program, indent=". "), "\n".join([
            "Program",
            ". ExpressionStatement",
            ". . IfExpression",
            ". . . BooleanLiteral true",
            ". . . BlockStatement",
            ". . . BlockStatement",
            ". . . . ExpressionStatement",
            ". . . . . CallExpression",
            ". . . . . . Identifier f",
        ]))


if __name__ == '__main__':
    unittest.main()
