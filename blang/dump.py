"""
Read-only renderings of tokens and syntax trees.

- ``format_tokens``: one ``line:column<TAB>kind<TAB>lexeme`` row per token
- ``format_ast``: indented ``kind ("literal")`` outline of a tree
- ``to_infix``: source-like text with every binary operation parenthesized
- ``build_rich_tree``: the same outline as a ``rich`` tree for terminals
"""

from typing import Iterable, List

from rich.text import Text
from rich.tree import Tree

from .lexer.tokens import Token, TokenType
from .parser.ast_nodes import ASTNode, ASTVisitor


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render a token listing; the EOF token is not listed."""
    rows = []
    for token in tokens:
        if token.type == TokenType.EOF:
            break
        rows.append(f"{token.location.line}:{token.location.column}\t{token.type}\t{token.lexeme}")
    return "\n".join(rows)


class OutlinePrinter(ASTVisitor):
    """Renders a tree as lines indented two spaces per level."""

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self.lines: List[str] = []

    def visit(self, node: ASTNode) -> List[str]:
        stack = [(node, 0)]
        while stack:
            current, depth = stack.pop()
            self.lines.append(f'{self.indent * depth}{current.node_type} ("{current.literal}")')
            stack.extend((child, depth + 1) for child in reversed(current.children))
        return self.lines


class InfixPrinter(ASTVisitor):
    """
    Renders a tree back to source form.

    Every binary operation is wrapped in parentheses so the grouping chosen
    by the parser is visible, e.g. ``1 - 2 - 3;`` becomes ``((1 - 2) - 3);``.
    """

    def visit(self, node: ASTNode) -> str:
        if node.node_type == TokenType.PROGRAM:
            return " ".join(f"{self._render(child)};" for child in node.children)
        return self._render(node)

    @staticmethod
    def _render(node: ASTNode) -> str:
        # Post-order walk: each operator pops its rendered operands
        rendered: List[str] = []
        stack = [(node, False)]
        while stack:
            current, expanded = stack.pop()
            if current.is_leaf:
                rendered.append(current.literal)
            elif not expanded:
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(current.children))
            else:
                right = rendered.pop()
                left = rendered.pop()
                if current.node_type == TokenType.ASSIGN:
                    rendered.append(f"{left} = {right}")
                else:
                    rendered.append(f"({left} {current.literal} {right})")
        return rendered.pop()


def format_ast(node: ASTNode) -> str:
    """Render the outline of ``node`` and its descendants."""
    return "\n".join(node.accept(OutlinePrinter()))


def to_infix(node: ASTNode) -> str:
    """Render ``node`` as fully parenthesized source text."""
    return node.accept(InfixPrinter())


def _label(node: ASTNode) -> Text:
    return Text.assemble((str(node.node_type), "bold cyan"), " ", (repr(node.literal), "green"))


def build_rich_tree(node: ASTNode) -> Tree:
    """Build a ``rich`` tree mirroring ``node``."""
    tree = Tree(_label(node))
    pending = [(tree, child) for child in node.children]
    while pending:
        branch, child = pending.pop(0)
        sub_branch = branch.add(_label(child))
        pending.extend((sub_branch, grandchild) for grandchild in child.children)
    return tree
