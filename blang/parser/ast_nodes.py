"""
Abstract Syntax Tree node definitions for Blang.

Every node records the token type it was built from, the token's text and
the location of that token. Nodes own their children outright: there are no
parent links and no node appears in two places of the tree.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..lexer.tokens import SourceLocation, TokenType


BINARY_OPERATORS = frozenset({
    TokenType.PLUS,
    TokenType.MINUS,
    TokenType.MULTIPLY,
    TokenType.DIVIDE,
})


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: TokenType, literal: str,
                 location: Optional[SourceLocation] = None,
                 children: Optional[List['ASTNode']] = None):
        self.node_type = node_type
        self.literal = literal
        self.location = location
        self.children: List['ASTNode'] = children if children is not None else []

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __str__(self) -> str:
        return f"{self.node_type} ({self.literal!r})"

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.node_type.name}, {self.literal!r}, "
                f"children={self.children!r})")

    def __eq__(self, other) -> bool:
        """Structural equality; locations are ignored."""
        if not isinstance(other, ASTNode):
            return NotImplemented
        pairs = [(self, other)]
        while pairs:
            left, right = pairs.pop()
            if (left.node_type != right.node_type or
                    left.literal != right.literal or
                    len(left.children) != len(right.children)):
                return False
            pairs.extend(zip(left.children, right.children))
        return True

    __hash__ = None


# ============================================================================
# Top-level nodes
# ============================================================================

class Program(ASTNode):
    """Root AST node; its children are the statements in source order."""

    def __init__(self, statements: Optional[List[ASTNode]] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(TokenType.PROGRAM, "program", location, list(statements or []))

    @property
    def statements(self) -> List[ASTNode]:
        return self.children


# ============================================================================
# Statements
# ============================================================================

class Assignment(ASTNode):
    """``target = value``."""

    def __init__(self, target: 'Identifier', value: ASTNode,
                 location: Optional[SourceLocation] = None, literal: str = "="):
        super().__init__(TokenType.ASSIGN, literal, location, [target, value])

    @property
    def target(self) -> 'Identifier':
        return self.children[0]

    @property
    def value(self) -> ASTNode:
        return self.children[1]


# ============================================================================
# Expressions
# ============================================================================

class BinaryOp(ASTNode):
    """Binary arithmetic operation (``+``, ``-``, ``*``, ``/``)."""

    def __init__(self, operator: TokenType, left: ASTNode, right: ASTNode,
                 location: Optional[SourceLocation] = None,
                 literal: Optional[str] = None):
        if operator not in BINARY_OPERATORS:
            raise ValueError(f"{operator.name} is not a binary operator")
        super().__init__(operator, literal or operator.value, location, [left, right])

    @property
    def operator(self) -> TokenType:
        return self.node_type

    @property
    def left(self) -> ASTNode:
        return self.children[0]

    @property
    def right(self) -> ASTNode:
        return self.children[1]


class Identifier(ASTNode):
    """Identifier reference."""

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(TokenType.IDENTIFIER, name, location)

    @property
    def name(self) -> str:
        return self.literal


class IntegerLiteral(ASTNode):
    """Integer literal; ``literal`` keeps the source digits."""

    def __init__(self, literal: str, location: Optional[SourceLocation] = None):
        super().__init__(TokenType.INTEGER, literal, location)

    @property
    def value(self) -> int:
        return int(self.literal)


# Alias for the main AST type
AST = Program
