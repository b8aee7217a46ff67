"""
Blang Lexer - turns a character stream into tokens on demand

The lexer pulls one character at a time from its input and keeps a single
character of push-back so that digit and letter runs can stop on the first
character that does not belong to them without losing it.
"""

import io
import logging
from typing import BinaryIO, List, Optional, TextIO, Union

from .tokens import Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS
from .errors import create_stream_error, create_pushback_error

logger = logging.getLogger(__name__)

Source = Union[str, bytes, TextIO, BinaryIO]

# Information separators count as whitespace for str.isspace() but not here
NON_BLANK_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def _is_space(char: str) -> bool:
    return char.isspace() and char not in NON_BLANK_SEPARATORS


class Lexer:
    """
    Blang lexical analyzer.

    Produces tokens one at a time through ``next_token``. Once the input is
    exhausted every further call returns an EOF token at the final position.
    """

    def __init__(self, source: Source, filename: str = "<string>"):
        """
        Initialize the lexer with a source.

        Args:
            source: Source text, raw UTF-8 bytes, or a text/binary stream.
                The lexer takes ownership of the stream for its lifetime.
                Text streams should be opened with ``newline=""`` so that a
                lone carriage return is not turned into a line break.
            filename: Name of source file for error reporting
        """
        self.filename = filename
        self.line = 1
        self.column = 0
        self._reader = self._open_reader(source)
        self._pushback: Optional[str] = None
        self._exhausted = False

        logger.debug("Lexer opened for %s", filename)

    @staticmethod
    def _open_reader(source: Source) -> TextIO:
        """Wrap the source so that ``read(1)`` yields one character."""
        if isinstance(source, str):
            return io.StringIO(source)
        if isinstance(source, bytes):
            source = io.BytesIO(source)
        if isinstance(source, (io.RawIOBase, io.BufferedIOBase)):
            return io.TextIOWrapper(source, encoding="utf-8", newline="")
        return source

    @property
    def location(self) -> SourceLocation:
        """Current position of the lexer."""
        return SourceLocation(self.filename, self.line, self.column)

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            The next token; EOF once the input is exhausted

        Raises:
            StreamError: If the underlying stream fails
        """
        while True:
            char = self._read()
            if not char:
                return Token(TokenType.EOF, "", self.location)

            self.column += 1

            if char == "\n":
                self._reset_position()
                continue

            if char in SINGLE_CHAR_TOKENS:
                return Token(SINGLE_CHAR_TOKENS[char], char, self.location)

            if _is_space(char):
                continue

            if char.isdecimal():
                start = self.location
                self._backup(char)
                return Token(TokenType.INTEGER, self._scan_run(str.isdecimal), start)

            if char.isalpha():
                start = self.location
                self._backup(char)
                return Token(TokenType.IDENTIFIER, self._scan_run(str.isalpha), start)

            return Token(TokenType.ILLEGAL, char, self.location)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining input.

        Returns:
            List of tokens including the final EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _scan_run(self, accepts) -> str:
        """Consume the longest run of characters accepted by ``accepts``."""
        chars = []
        while True:
            char = self._read()
            if not char:
                break

            self.column += 1
            if accepts(char):
                chars.append(char)
            else:
                # Leave the terminator for the next call
                self._backup(char)
                break

        return "".join(chars)

    def _read(self) -> str:
        """Read one character, or return '' at end of input."""
        if self._pushback is not None:
            char, self._pushback = self._pushback, None
            return char

        if self._exhausted:
            return ""

        try:
            char = self._reader.read(1)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise create_stream_error(e, self.location) from e

        if not char:
            self._exhausted = True
        return char

    def _backup(self, char: str):
        """Push one character back and step the column back over it."""
        if self._pushback is not None:
            raise create_pushback_error(self.location)

        self._pushback = char
        self.column -= 1

    def _reset_position(self):
        """Move to the start of the next line."""
        self.line += 1
        self.column = 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens including EOF
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file

    Returns:
        List of tokens including EOF

    Raises:
        StreamError: If the file cannot be decoded or read mid-way
        IOError: If file cannot be opened
    """
    with open(filepath, 'r', encoding='utf-8', newline='') as f:
        return Lexer(f, filepath).tokenize()
