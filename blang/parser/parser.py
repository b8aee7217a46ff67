"""
Blang Recursive Descent Parser

Builds an AST from the token stream of a Lexer, one token at a time.

Grammar (lowest to highest precedence):

    program    := statement* EOF
    statement  := IDENTIFIER ASSIGN expr SEMICOLON
                | expr SEMICOLON
    expr       := term ((PLUS | MINUS) term)*
    term       := factor ((MULTIPLY | DIVIDE) factor)*
    factor     := INTEGER | IDENTIFIER | LEFT_PAREN expr RIGHT_PAREN

Binary operators are left associative.
"""

import logging
from typing import Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from .ast_nodes import ASTNode, Assignment, BinaryOp, Identifier, IntegerLiteral, Program
from .errors import (
    create_unexpected_token_error, create_invalid_expression_error, create_nesting_error
)

logger = logging.getLogger(__name__)

ADDITIVE_OPERATORS = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE_OPERATORS = (TokenType.MULTIPLY, TokenType.DIVIDE)


class Parser:
    """
    Blang recursive descent parser.

    Holds exactly one token of look-ahead (``current``) and pulls the next
    one from the lexer whenever a token is consumed.
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize parser and load the first token.

        Args:
            lexer: Lexer to pull tokens from; owned by this parser
        """
        self.lexer = lexer
        self.current: Token = lexer.next_token()

    def parse(self) -> Program:
        """
        Parse the whole token stream into an AST.

        Returns:
            Program AST node whose children are the statements

        Raises:
            GrammarViolation: If the tokens do not match the grammar, or a
                statement nests deeper than the interpreter's recursion limit
            StreamError: If the lexer's input fails
        """
        program = Program(location=self.current.location)

        while not self._check(TokenType.EOF):
            try:
                statement = self._parse_statement()
            except RecursionError:
                raise self._error(create_nesting_error(self.current)) from None
            program.children.append(statement)

        logger.debug("Parsed %d statements from %s",
                     len(program.children), self.lexer.filename)
        return program

    def _parse_statement(self) -> ASTNode:
        """Parse ``IDENTIFIER = expr ;`` or ``expr ;``."""
        if self._check(TokenType.IDENTIFIER):
            identifier = self._parse_identifier()

            if self._check(TokenType.ASSIGN):
                assign_token = self._advance()
                node = Assignment(identifier, self._parse_expression(),
                                  assign_token.location, assign_token.lexeme)
            else:
                # Not an assignment: the identifier is the first operand
                node = self._parse_expression(first=identifier)
        else:
            node = self._parse_expression()

        self._consume(TokenType.SEMICOLON)
        return node

    def _parse_expression(self, first: Optional[ASTNode] = None) -> ASTNode:
        """Parse ``term ((+ | -) term)*``."""
        node = self._parse_term(first)

        while self.current.type in ADDITIVE_OPERATORS:
            operator_token = self._advance()
            node = BinaryOp(operator_token.type, node, self._parse_term(),
                            operator_token.location, operator_token.lexeme)

        return node

    def _parse_term(self, first: Optional[ASTNode] = None) -> ASTNode:
        """Parse ``factor ((* | /) factor)*``, optionally seeded with a parsed factor."""
        node = first if first is not None else self._parse_factor()

        while self.current.type in MULTIPLICATIVE_OPERATORS:
            operator_token = self._advance()
            node = BinaryOp(operator_token.type, node, self._parse_factor(),
                            operator_token.location, operator_token.lexeme)

        return node

    def _parse_factor(self) -> ASTNode:
        """Parse an integer, an identifier or a parenthesized expression."""
        token_type = self.current.type

        if token_type == TokenType.INTEGER:
            token = self._advance()
            return IntegerLiteral(token.lexeme, token.location)

        if token_type == TokenType.IDENTIFIER:
            return self._parse_identifier()

        if token_type == TokenType.LEFT_PAREN:
            self._advance()
            node = self._parse_expression()
            self._consume(TokenType.RIGHT_PAREN)
            return node

        raise self._error(create_invalid_expression_error(self.current))

    def _parse_identifier(self) -> Identifier:
        token = self._advance()
        return Identifier(token.lexeme, token.location)

    # Utility methods

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self.current.type == token_type

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current
        self.current = self.lexer.next_token()
        return token

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()

        raise self._error(create_unexpected_token_error(token_type, self.current))

    def _error(self, error):
        logger.debug("Grammar violation at %s: %s", error.location, error.args[0])
        return error


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails
    """
    return Parser(Lexer(source, filename)).parse()


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Args:
        filepath: Path to source file

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails
        LexerError: If the file cannot be decoded or read mid-way
        IOError: If file cannot be opened
    """
    with open(filepath, 'r', encoding='utf-8', newline='') as f:
        return Parser(Lexer(f, filepath)).parse()
