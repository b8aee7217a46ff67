"""
Error handling for the Blang lexer.

Provides error reporting with source location information and
diagnostics that the command line driver prints as-is.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class StreamError(LexerError):
    """
    The underlying input stream failed for a reason other than exhaustion.

    The exception raised by the stream is available as ``__cause__``.
    """


def create_stream_error(reason: Exception, location: SourceLocation) -> StreamError:
    """Create an error for a failed read on the input stream."""
    return StreamError(
        message=f"Failed to read source: {reason}",
        location=location,
        code="L001",
        help_text="The input could not be read past this point.",
        suggestions=["Check that the file is readable", "Make sure the source is valid UTF-8"]
    )


def create_pushback_error(location: SourceLocation) -> LexerError:
    """Create an error for pushing back more than one character."""
    return LexerError(
        message="Cannot push back more than one character",
        location=location,
        code="L002",
        help_text="The lexer keeps a single character of look-ahead.",
    )
