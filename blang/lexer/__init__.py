"""
Blang Lexer Package

Implements a pull-based lexical analyzer (tokenizer) for the Blang language.

Key Features:
- One token per call, with EOF repeated once the input is exhausted
- Maximal munch over digit runs and letter runs
- Single character push-back independent of the input stream
- Line and column tracking for every token

"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError, StreamError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "StreamError",
    "tokenize_string",
    "tokenize_file",
]
