"""
Error handling for the Blang parser.

Provides error reporting with source location information and suggestions
for the common syntax mistakes (missing semicolon, unclosed parenthesis).
Parse errors are fatal: the parser never resynchronizes after one.
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
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
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class GrammarViolation(ParseError):
    """
    The current token does not satisfy the production being parsed.

    ``expected`` is the token type the parser needed, or a description
    when several token types would have been accepted.
    """

    def __init__(self, message: str, expected: Union[TokenType, str], token: Token, **kwargs):
        super().__init__(message, token.location, token=token, **kwargs)
        self.expected = expected

    @property
    def found(self) -> TokenType:
        return self.token.type


_MISSING_TOKEN_CODES = {
    TokenType.SEMICOLON: "P003",
    TokenType.RIGHT_PAREN: "P004",
}


def suggest_missing_token(expected: TokenType) -> List[str]:
    """Suggest what token might be missing."""
    token_suggestions = {
        TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
        TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
    }
    return list(token_suggestions.get(expected, []))


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"{token.type.name} ({token.lexeme!r})"


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> GrammarViolation:
    """Create an error for an unexpected token."""
    if isinstance(expected, TokenType):
        expected_str = expected.name
        code = _MISSING_TOKEN_CODES.get(expected, "P001")
        suggestions = suggest_missing_token(expected)
    else:
        expected_str = expected
        code = "P001"
        suggestions = []

    found_str = _describe(found)

    return GrammarViolation(
        message=f"Expected {expected_str}, found {found_str}",
        expected=expected,
        token=found,
        code=code,
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=suggestions
    )


def create_invalid_expression_error(found: Token) -> GrammarViolation:
    """Create an error for a token that cannot start an operand."""
    found_str = _describe(found)

    return GrammarViolation(
        message=f"Unexpected {found_str} in expression",
        expected="INTEGER, IDENTIFIER or LEFT_PAREN",
        token=found,
        code="P005",
        help_text="An operand must be an integer, an identifier or a parenthesized expression.",
        suggestions=["Check the expression syntax", "Ensure all operators have operands"]
    )


def create_nesting_error(found: Token) -> GrammarViolation:
    """Create an error for a statement nested beyond the recursion limit."""
    return GrammarViolation(
        message="Expression nested too deeply",
        expected="a shallower expression",
        token=found,
        code="P006",
        help_text="Each parenthesis or operand adds a level of recursion to the parser.",
        suggestions=["Split the expression into several assignments"]
    )
