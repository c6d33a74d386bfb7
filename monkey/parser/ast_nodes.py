"""
Abstract Syntax Tree node definitions for Monkey.

The node set is closed: a Program root, four statement kinds and eight
expression kinds. Every node keeps the token it was built from, renders
itself back to canonical source-like text via ``str()``, and supports the
visitor pattern through ``accept()``.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"

    # Statements
    LET_STATEMENT = "LetStatement"
    RETURN_STATEMENT = "ReturnStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BLOCK_STATEMENT = "BlockStatement"

    # Expressions
    IDENTIFIER = "Identifier"
    INTEGER_LITERAL = "IntegerLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"
    PREFIX_EXPRESSION = "PrefixExpression"
    INFIX_EXPRESSION = "InfixExpression"
    IF_EXPRESSION = "IfExpression"
    FUNCTION_LITERAL = "FunctionLiteral"
    CALL_EXPRESSION = "CallExpression"


class ASTVisitor:
    """
    Visitor base class.

    ``visit`` dispatches on the node's type tag to a ``visit_<tag>`` method
    (``visit_infix_expression``, ``visit_let_statement`` ...) and falls
    back to ``generic_visit``, which walks the children.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{node.node_type.name.lower()}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        for child in node.children():
            child.accept(self)
        return None


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ASTNodeType

    def __init__(self, token: Token):
        self.token = token

    def token_literal(self) -> str:
        """Literal of the token this node was built from."""
        return self.token.literal

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes, in source order."""
        pass

    @abstractmethod
    def __str__(self) -> str:
        """Render the node in its canonical textual form."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def __eq__(self, other) -> bool:
        """Structural equality. Token locations don't take part."""
        if type(self) is not type(other):
            return NotImplemented
        return self.__dict__ == other.__dict__

    __hash__ = None


# ============================================================================
# Top-level node
# ============================================================================

class Program(ASTNode):
    """Root AST node. Owns every top-level statement, in source order."""
    node_type = ASTNodeType.PROGRAM
    statements: Tuple['Statement', ...]

    def __init__(self, statements: Sequence['Statement'] = ()):
        self.statements = tuple(statements)
        # The root has no token of its own; borrow the first statement's
        self.token = self.statements[0].token if self.statements else None

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def __str__(self) -> str:
        return "".join(str(stmt) for stmt in self.statements)


# ============================================================================
# Statements
# ============================================================================

class Statement(ASTNode):
    """Base class for statements."""
    pass


class LetStatement(Statement):
    """``let <name> = <value>;``"""
    node_type = ASTNodeType.LET_STATEMENT
    name: 'Identifier'
    value: 'Expression'

    def __init__(self, token: Token, name: 'Identifier', value: 'Expression'):
        super().__init__(token)
        self.name = name
        self.value = value

    def children(self) -> List[ASTNode]:
        return [self.name, self.value]

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


class ReturnStatement(Statement):
    """``return <value>;``"""
    node_type = ASTNodeType.RETURN_STATEMENT
    value: 'Expression'

    def __init__(self, token: Token, value: 'Expression'):
        super().__init__(token)
        self.value = value

    def children(self) -> List[ASTNode]:
        return [self.value]

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.value};"


class ExpressionStatement(Statement):
    """A bare expression used as a statement."""
    node_type = ASTNodeType.EXPRESSION_STATEMENT
    expression: 'Expression'

    def __init__(self, token: Token, expression: 'Expression'):
        super().__init__(token)
        self.expression = expression

    def children(self) -> List[ASTNode]:
        return [self.expression]

    def __str__(self) -> str:
        return str(self.expression)


class BlockStatement(Statement):
    """Statements between ``{`` and ``}``; body of ifs and functions."""
    node_type = ASTNodeType.BLOCK_STATEMENT
    statements: Tuple[Statement, ...]

    def __init__(self, token: Token, statements: Sequence[Statement] = ()):
        super().__init__(token)
        self.statements = tuple(statements)

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + " ".join(str(stmt) for stmt in self.statements) + " }"


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """Base class for expressions."""
    pass


class Identifier(Expression):
    """Identifier expression; also the name slot of let and fn parameters."""
    node_type = ASTNodeType.IDENTIFIER
    value: str

    def __init__(self, token: Token, value: str):
        super().__init__(token)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.value


class IntegerLiteral(Expression):
    """Signed 64-bit integer literal."""
    node_type = ASTNodeType.INTEGER_LITERAL
    value: int

    def __init__(self, token: Token, value: int):
        super().__init__(token)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.token_literal()


class BooleanLiteral(Expression):
    node_type = ASTNodeType.BOOLEAN_LITERAL
    value: bool

    def __init__(self, token: Token, value: bool):
        super().__init__(token)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.token_literal()


class PrefixExpression(Expression):
    """Unary ``!x`` or ``-x``."""
    node_type = ASTNodeType.PREFIX_EXPRESSION
    operator: str
    right: Expression

    def __init__(self, token: Token, operator: str, right: Expression):
        super().__init__(token)
        self.operator = operator
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.right]

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


class InfixExpression(Expression):
    """Binary operation expression."""
    node_type = ASTNodeType.INFIX_EXPRESSION
    left: Expression
    operator: str
    right: Expression

    def __init__(self, token: Token, left: Expression, operator: str, right: Expression):
        super().__init__(token)
        self.left = left
        self.operator = operator
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def wrap(self, left_text: str) -> str:
        return f"({left_text} {self.operator} {self.right})"

    def __str__(self) -> str:
        return _render_left_spine(self)


class IfExpression(Expression):
    """If expression with optional else block."""
    node_type = ASTNodeType.IF_EXPRESSION
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __init__(self, token: Token, condition: Expression, consequence: BlockStatement,
                 alternative: Optional[BlockStatement] = None):
        super().__init__(token)
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    def children(self) -> List[ASTNode]:
        children = [self.condition, self.consequence]
        if self.alternative is not None:
            children.append(self.alternative)
        return children

    def __str__(self) -> str:
        result = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


class FunctionLiteral(Expression):
    """``fn(<params>) { <body> }``"""
    node_type = ASTNodeType.FUNCTION_LITERAL
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __init__(self, token: Token, parameters: Sequence[Identifier], body: BlockStatement):
        super().__init__(token)
        self.parameters = tuple(parameters)
        self.body = body

    def children(self) -> List[ASTNode]:
        return list(self.parameters) + [self.body]

    def __str__(self) -> str:
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


class CallExpression(Expression):
    """Function call expression."""
    node_type = ASTNodeType.CALL_EXPRESSION
    function: Expression  # Identifier or FunctionLiteral, usually
    arguments: Tuple[Expression, ...]

    def __init__(self, token: Token, function: Expression, arguments: Sequence[Expression]):
        super().__init__(token)
        self.function = function
        self.arguments = tuple(arguments)

    def children(self) -> List[ASTNode]:
        return [self.function] + list(self.arguments)

    def wrap(self, function_text: str) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{function_text}({args})"

    def __str__(self) -> str:
        return _render_left_spine(self)


def _render_left_spine(node: Expression) -> str:
    """
    Render a chain of infix and call expressions without recursing on the left.

    ``1 + 1 + ... + 1`` and ``f(a)(b)...(z)`` fold to the left, so their
    depth grows with the length of the chain rather than with nesting.
    """
    spine = []
    while isinstance(node, (InfixExpression, CallExpression)):
        spine.append(node)
        node = node.left if isinstance(node, InfixExpression) else node.function

    text = str(node)
    for outer in reversed(spine):
        text = outer.wrap(text)
    return text


# ============================================================================
# Tree dump
# ============================================================================

class TreePrinter(ASTVisitor):
    """
    Builds an indented one-node-per-line dump of a tree.

    The ``visit_*`` methods only produce the label of a single node;
    ``dump`` walks the tree with an explicit stack, since left-folded
    operator chains can be thousands of nodes deep.
    """

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def dump(self, root: ASTNode) -> str:
        lines: List[str] = []
        stack = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append(self.indent * depth + node.accept(self))
            stack.extend((child, depth + 1) for child in reversed(node.children()))
        return "\n".join(lines)

    @staticmethod
    def _label(node: ASTNode, detail: str) -> str:
        return f"{node.node_type.value} {detail}"

    def generic_visit(self, node: ASTNode) -> str:
        return node.node_type.value

    def visit_identifier(self, node: Identifier) -> str:
        return self._label(node, node.value)

    def visit_integer_literal(self, node: IntegerLiteral) -> str:
        return self._label(node, str(node.value))

    def visit_boolean_literal(self, node: BooleanLiteral) -> str:
        return self._label(node, node.token_literal())

    def visit_prefix_expression(self, node: PrefixExpression) -> str:
        return self._label(node, node.operator)

    def visit_infix_expression(self, node: InfixExpression) -> str:
        return self._label(node, node.operator)


def dump_tree(node: ASTNode, indent: str = "  ") -> str:
    """Return an indented textual tree for ``node``, one node per line."""
    return TreePrinter(indent).dump(node)
