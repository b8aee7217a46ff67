"""
Blang Front End Package

A small front end for the Blang toy expression language: a pull-based
tokenizer and a recursive descent parser producing an abstract syntax tree.

Architecture:
    blang/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and AST generation
    ├── dump.py          # Token listings and AST rendering
    └── cli.py           # Command line driver

License: MIT
"""

from ._version import __version__

__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, SourceLocation
from .parser import Parser, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "SourceLocation",

    # Convenience entry points
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__license__",
]
