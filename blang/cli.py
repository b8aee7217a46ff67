"""
Command line driver for the Blang front end.

    blang lex FILE                    # token listing
    blang parse FILE                  # indented syntax tree
    blang parse --format infix FILE   # fully parenthesized source
    blang parse --format rich FILE    # tree drawn with rich

FILE may be ``-`` to read standard input. Lexer and parser failures are
printed to stderr and the command exits with status 1.
"""

import logging
import sys
from contextlib import contextmanager

import click
from rich.console import Console

from ._version import __version__
from .dump import build_rich_tree, format_ast, format_tokens, to_infix
from .lexer import Lexer, LexerError
from .parser import Parser, ParseError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

SOURCE_PATH = click.Path(exists=True, dir_okay=False, allow_dash=True)


@contextmanager
def open_source(path):
    """Yield (stream, display name) for PATH, reading stdin for ``-``.

    Line endings are passed through untouched so a lone ``\\r`` is never a
    line break.
    """
    if path == "-":
        yield click.get_binary_stream("stdin"), "<stdin>"
        return

    with open(path, "r", encoding="utf-8", newline="") as f:
        yield f, path


@click.group()
@click.version_option(__version__, prog_name="blang")
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging verbosity (written to stderr).")
def main(log_level):
    """Tokenize and parse Blang source files."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)


@main.command()
@click.argument("source", type=SOURCE_PATH)
def lex(source):
    """Print the tokens of SOURCE, one per line."""
    with open_source(source) as (stream, filename):
        try:
            tokens = Lexer(stream, filename).tokenize()
        except LexerError as e:
            _fail(e)

    listing = format_tokens(tokens)
    if listing:
        click.echo(listing)


@main.command()
@click.argument("source", type=SOURCE_PATH)
@click.option("--format", "output_format", default="tree", show_default=True,
              type=click.Choice(["tree", "infix", "rich"]),
              help="How to print the syntax tree.")
def parse(source, output_format):
    """Parse SOURCE and print its syntax tree."""
    with open_source(source) as (stream, filename):
        try:
            program = Parser(Lexer(stream, filename)).parse()
        except (LexerError, ParseError) as e:
            _fail(e)

    logger.info("Parsed %d statements from %s", len(program.children), filename)

    if output_format == "rich":
        Console().print(build_rich_tree(program))
    elif output_format == "infix":
        click.echo(to_infix(program))
    else:
        click.echo(format_ast(program))


def _fail(error: Exception):
    click.echo(str(error).rstrip("\n"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    main()
