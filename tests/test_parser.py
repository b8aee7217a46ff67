"""
Test suite for the Blang parser.

Tests cover:
- Statement forms (assignment and bare expression)
- Operator precedence and left associativity
- Grammar violations and their diagnostics
- Pulling tokens lazily from the lexer
"""

import io
import os
import sys
import tempfile
import unittest
from fractions import Fraction

import pytest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from blang.lexer import Lexer, StreamError, TokenType
from blang.parser import (
    Parser, parse_string, parse_file, ParseError, GrammarViolation,
    Program, Assignment, BinaryOp, Identifier, IntegerLiteral,
)
from blang.dump import to_infix


def num(text):
    return IntegerLiteral(text)


def name(text):
    return Identifier(text)


def binop(operator, left, right):
    return BinaryOp(operator, left, right)


def evaluate(node, env):
    """Evaluate an expression tree exactly, for checking groupings."""
    if node.node_type == TokenType.INTEGER:
        return Fraction(node.value)
    if node.node_type == TokenType.IDENTIFIER:
        return env[node.literal]
    left, right = (evaluate(child, env) for child in node.children)
    if node.node_type == TokenType.PLUS:
        return left + right
    if node.node_type == TokenType.MINUS:
        return left - right
    if node.node_type == TokenType.MULTIPLY:
        return left * right
    return left / right


def run(program):
    """Execute a program and return the value of its last statement."""
    env = {}
    result = None
    for statement in program.statements:
        if isinstance(statement, Assignment):
            result = env[statement.target.name] = evaluate(statement.value, env)
        else:
            result = evaluate(statement, env)
    return result


class TestStatements(unittest.TestCase):
    """Test cases for statement parsing."""

    def test_assignment_with_precedence(self):
        """``*`` binds tighter than ``+`` on the right of ``=``."""
        program = parse_string("x = 1 + 2 * 3;")

        expected = Program([
            Assignment(name("x"), binop(TokenType.PLUS, num("1"),
                                        binop(TokenType.MULTIPLY, num("2"), num("3")))),
        ])
        self.assertEqual(program, expected)

        assignment = program.children[0]
        self.assertEqual(assignment.node_type, TokenType.ASSIGN)
        self.assertEqual(assignment.target.name, "x")
        self.assertEqual(assignment.value.node_type, TokenType.PLUS)
        self.assertEqual(assignment.value.right.node_type, TokenType.MULTIPLY)

    def test_program_root(self):
        program = parse_string("1;")
        self.assertIsInstance(program, Program)
        self.assertEqual(program.node_type, TokenType.PROGRAM)
        self.assertEqual(program.literal, "program")
        self.assertEqual(program.children, [num("1")])

    def test_empty_program(self):
        program = parse_string("  \n ")
        self.assertEqual(program.children, [])

    def test_statements_in_source_order(self):
        program = parse_string("a = 1;\nb = a * 2;\na + b;")
        self.assertEqual(len(program.children), 3)
        self.assertEqual([type(s) for s in program.children], [Assignment, Assignment, BinaryOp])
        self.assertEqual(program.children[1].target.name, "b")

    def test_bare_identifier_statement(self):
        self.assertEqual(parse_string("x;").children, [name("x")])

    def test_identifier_followed_by_additive_operator(self):
        self.assertEqual(parse_string("x + 1;").children,
                         [binop(TokenType.PLUS, name("x"), num("1"))])

    def test_identifier_followed_by_multiplicative_operator(self):
        """A leading identifier continues into the full term loop."""
        bare = parse_string("x * 2;")
        grouped = parse_string("(x) * 2;")
        self.assertEqual(bare, grouped)
        self.assertEqual(bare.children, [binop(TokenType.MULTIPLY, name("x"), num("2"))])

    def test_identifier_leading_mixed_expression(self):
        program = parse_string("x * 2 + y / 4 - z;")
        expected = binop(
            TokenType.MINUS,
            binop(TokenType.PLUS,
                  binop(TokenType.MULTIPLY, name("x"), num("2")),
                  binop(TokenType.DIVIDE, name("y"), num("4"))),
            name("z"),
        )
        self.assertEqual(program.children, [expected])

    def test_assignment_value_is_full_expression(self):
        program = parse_string("total = (a + b) * c;")
        self.assertEqual(program.children[0].value,
                         binop(TokenType.MULTIPLY,
                               binop(TokenType.PLUS, name("a"), name("b")),
                               name("c")))

    def test_node_locations(self):
        program = parse_string("x = 1 +\n  2;")
        assignment = program.children[0]
        self.assertEqual((assignment.location.line, assignment.location.column), (1, 3))
        plus = assignment.value
        self.assertEqual((plus.location.line, plus.location.column), (1, 7))
        self.assertEqual((plus.right.location.line, plus.right.location.column), (2, 3))

    def test_leaf_arity(self):
        program = parse_string("y = 4 / x;")
        division = program.children[0].value
        self.assertEqual(len(division.children), 2)
        self.assertTrue(division.left.is_leaf)
        self.assertTrue(division.right.is_leaf)
        self.assertEqual(division.left.value, 4)

    def test_binary_op_rejects_non_operator(self):
        with self.assertRaises(ValueError):
            BinaryOp(TokenType.ASSIGN, num("1"), num("2"))


class TestAssociativity(unittest.TestCase):
    """Left associativity of same-precedence operators."""

    def test_subtraction_chain(self):
        program = parse_string("1 - 2 - 3;")
        expected = binop(TokenType.MINUS, binop(TokenType.MINUS, num("1"), num("2")), num("3"))
        self.assertEqual(program.children, [expected])
        self.assertEqual(run(program), -4)

    def test_division_chain(self):
        program = parse_string("8 / 4 / 2;")
        expected = binop(TokenType.DIVIDE, binop(TokenType.DIVIDE, num("8"), num("4")), num("2"))
        self.assertEqual(program.children, [expected])
        self.assertEqual(run(program), 1)

    def test_mixed_multiplicative_chain(self):
        program = parse_string("12 / 3 * 2;")
        self.assertEqual(run(program), 8)

    def test_parentheses_override_grouping(self):
        program = parse_string("1 - (2 - 3);")
        self.assertEqual(program.children[0].right,
                         binop(TokenType.MINUS, num("2"), num("3")))
        self.assertEqual(run(program), 2)

    def test_nested_parentheses(self):
        program = parse_string("((((7))));")
        self.assertEqual(program.children, [num("7")])

    def test_long_chain_builds_left_leaning_tree(self):
        source = "+".join(["1"] * 1500) + ";"
        statement = parse_string(source).children[0]

        depth = 0
        node = statement
        while not node.is_leaf:
            self.assertEqual(node.right, num("1"))
            node = node.left
            depth += 1
        self.assertEqual(depth, 1499)
        self.assertEqual(parse_string(source), parse_string(source))


class TestGrammarViolations(unittest.TestCase):
    """Fatal parse errors."""

    def assertViolation(self, source, expected, found):
        with self.assertRaises(GrammarViolation) as ctx:
            parse_string(source)
        self.assertEqual(ctx.exception.expected, expected)
        self.assertEqual(ctx.exception.found, found)
        return ctx.exception

    def test_missing_semicolon_at_end(self):
        error = self.assertViolation("1 + 2", TokenType.SEMICOLON, TokenType.EOF)
        self.assertEqual(error.diagnostic.code, "P003")
        self.assertIn("Expected SEMICOLON, found end of input", str(error))

    def test_unbalanced_parenthesis(self):
        error = self.assertViolation("(1 + 2;", TokenType.RIGHT_PAREN, TokenType.SEMICOLON)
        self.assertEqual(error.diagnostic.code, "P004")
        self.assertIn("closing parenthesis", str(error))

    def test_missing_operand(self):
        error = self.assertViolation("x = ;", "INTEGER, IDENTIFIER or LEFT_PAREN",
                                     TokenType.SEMICOLON)
        self.assertEqual(error.diagnostic.code, "P005")

    def test_dangling_operator(self):
        self.assertViolation("1 + ;", "INTEGER, IDENTIFIER or LEFT_PAREN", TokenType.SEMICOLON)

    def test_statement_cannot_start_with_assign(self):
        self.assertViolation("= 1;", "INTEGER, IDENTIFIER or LEFT_PAREN", TokenType.ASSIGN)

    def test_illegal_token_is_rejected(self):
        error = self.assertViolation("1 $ 2;", TokenType.SEMICOLON, TokenType.ILLEGAL)
        self.assertEqual(error.token.lexeme, "$")

    def test_illegal_token_as_operand(self):
        self.assertViolation("x = #;", "INTEGER, IDENTIFIER or LEFT_PAREN", TokenType.ILLEGAL)

    def test_unterminated_bare_identifier(self):
        self.assertViolation("x = 1; y", TokenType.SEMICOLON, TokenType.EOF)

    def test_stray_right_paren(self):
        self.assertViolation("1);", TokenType.SEMICOLON, TokenType.RIGHT_PAREN)

    def test_violation_reports_location(self):
        error = self.assertViolation("x = 1\ny = 2;", TokenType.SEMICOLON, TokenType.IDENTIFIER)
        self.assertEqual((error.location.line, error.location.column), (2, 1))
        self.assertIn("<string>:2:1", str(error))

    def test_violation_is_a_parse_error(self):
        with self.assertRaises(ParseError):
            parse_string("(")

    def test_excessive_nesting_is_a_violation(self):
        source = "(" * 1000 + "1" + ")" * 1000 + ";"
        with self.assertRaises(GrammarViolation) as ctx:
            parse_string(source)
        self.assertEqual(ctx.exception.diagnostic.code, "P006")
        self.assertIn("nested too deeply", str(ctx.exception))
        self.assertIsNone(ctx.exception.__cause__)

    def test_moderate_nesting_parses(self):
        program = parse_string("(" * 50 + "x" + ")" * 50 + ";")
        self.assertEqual(program.children, [name("x")])


class TestTokenPulling(unittest.TestCase):
    """The parser consumes the lexer one token at a time."""

    def test_constructor_loads_one_token(self):
        lexer = Lexer("abc = 1;")
        parser = Parser(lexer)
        self.assertEqual(parser.current.lexeme, "abc")
        # ' ' after abc was read and pushed back
        self.assertEqual(lexer.column, 3)

    def test_stream_error_propagates(self):
        class FailsAfterFirstRead(io.StringIO):
            def read(self, size=-1):
                if self.tell() >= 2:
                    raise OSError("connection reset")
                return super().read(size)

        with self.assertRaises(StreamError):
            Parser(Lexer(FailsAfterFirstRead("1 + 2;"))).parse()

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.bl")
            with open(path, "w", encoding="utf-8") as f:
                f.write("a = 2;\nb = a * (a + 1);\nb - a;\n")

            program = parse_file(path)

        self.assertEqual(len(program.children), 3)
        self.assertEqual(run(program), 4)

    def test_parse_file_reports_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bad.bl")
            with open(path, "w", encoding="utf-8") as f:
                f.write("a = 2")

            with self.assertRaises(GrammarViolation) as ctx:
                parse_file(path)

        self.assertEqual(ctx.exception.location.filename, path)


@pytest.mark.parametrize("source,value", [
    ("2 * (3 + 4) - 10 / 5;", 12),
    ("x = 6; y = x / 4; x - y * 2;", 3),
    ("100 - 10 - 1;", 89),
    ("2 * 3 + 4 * 5;", 26),
    ("n = 5; n * n - n / 5 * 2;", 23),
])
def test_infix_rendering_preserves_meaning(source, value):
    program = parse_string(source)
    reparsed = parse_string(to_infix(program))

    assert reparsed == program
    assert run(program) == value
    assert run(reparsed) == value


if __name__ == "__main__":
    unittest.main()
