"""
Blang Parser Package

Implements a recursive descent parser for Blang statements and arithmetic
expressions. Produces a tree rooted at a synthetic Program node.

Key Features:
- One token of look-ahead pulled lazily from the lexer
- Left associative binary operators with * and / binding tighter than + and -
- Fatal, location-carrying grammar errors (no partial trees)

"""

from .ast_nodes import (
    AST, ASTNode, ASTVisitor, Program, Assignment, BinaryOp, Identifier, IntegerLiteral,
)
from .parser import Parser, parse_string, parse_file
from .errors import ParseError, GrammarViolation

__all__ = [
    # Core parser
    "Parser",
    "parse_string",
    "parse_file",

    # AST nodes
    "AST", "ASTNode", "ASTVisitor",
    "Program", "Assignment", "BinaryOp", "Identifier", "IntegerLiteral",

    # Error handling
    "ParseError", "GrammarViolation",
]
