"""
Token definitions for the Blang lexer.

This module defines the closed set of token types the lexer can produce:
- Special tokens (end of input, illegal characters)
- Literals and identifiers
- Arithmetic operators, assignment and punctuation

Each token type carries its display name as its enum value, so
``str(TokenType.PLUS)`` renders as ``+`` in listings and diagnostics.
"""

from enum import Enum
from dataclasses import dataclass


class TokenType(Enum):
    """
    Enumeration of all token types in Blang.

    The value of each member is the name shown in token listings.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = "EOF"                     # End of input
    ILLEGAL = "ILLEGAL"             # Unrecognized character

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    IDENTIFIER = "IDENT"            # x, total
    INTEGER = "INT"                 # 42

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    ASSIGN = "="

    # ========================================================================
    # Punctuation
    # ========================================================================
    SEMICOLON = ";"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"

    # ========================================================================
    # Synthetic kinds (never produced by the lexer)
    # ========================================================================
    PROGRAM = "program"             # Root of the syntax tree

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Name used when printing tokens and tree nodes."""
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    ``line`` starts at 1. ``column`` is 0 at the start of a line and counts
    consumed characters, so the first character of a line is column 1.
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Blang language.

    Contains the token type, the exact source text (empty for EOF) and
    the location where the token starts.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    location: SourceLocation        # Start of the token

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    def __iter__(self):
        # Allows ``location, kind, lexeme = lexer.next_token()``
        return iter((self.location, self.type, self.lexeme))

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type == TokenType.INTEGER

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator."""
        return self.type in OPERATORS.values()

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer for single-character tokens

OPERATORS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "=": TokenType.ASSIGN,
}

PUNCTUATION = {
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

SINGLE_CHAR_TOKENS = {**OPERATORS, **PUNCTUATION}
