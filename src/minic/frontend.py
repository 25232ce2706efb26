"""
minic Front End
===============

This module wires the lexer and the parser together:

    Source text → Lexer → tokens → Parser → StatementBlock

Usage
-----
Command line:
    $ minicc hello.c --ast

Programmatic:
    >>> from minic.frontend import parse_source
    >>> tree = parse_source("int main() { return 0; }")
    >>> len(tree.statements)
    1

Error Handling
--------------
The parser stops at the first syntax error. The front end attaches the
file name and the offending source line to the error before re-raising
it, so messages point at a line and column instead of a bare offset.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from minic.ast import ASTPrinter, StatementBlock
from minic.errors import MinicError
from minic.lexer import Lexer
from minic.parser import Parser
from minic.tokens import DEFAULT_TOKEN_TABLE, Token, TokenTable


logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        token_table: Keyword/operator/punctuator table for the lexer
        encoding: Text encoding used when reading source files
    """
    token_table: TokenTable = field(default=DEFAULT_TOKEN_TABLE)
    encoding: str = "utf-8"


@dataclass
class FrontendResult:
    """
    Result of running the front end over one source.

    Attributes:
        filename: Source name used in diagnostics
        tokens: The token sequence produced by the lexer
        tree: The parsed tree
    """
    filename: str
    tokens: list[Token] = field(default_factory=list)
    tree: Optional[StatementBlock] = None

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    def format_tokens(self) -> str:
        """One token per line: offset, kind and text."""
        return "\n".join(
            f"{token.offset:>6}  {token.kind.value:<10}  {token.text}"
            for token in self.tokens
        )

    def format_tree(self) -> str:
        """Indented dump of the tree."""
        return ASTPrinter().print(self.tree)


class Frontend:
    """
    Lexes and parses minic sources.

    Example:
        frontend = Frontend()
        result = frontend.parse_file("hello.c")
        print(result.format_tree())

    Attributes:
        options: Front-end configuration options
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def run(self, source: str, filename: str = "<input>") -> FrontendResult:
        """
        Lex and parse source text.

        Raises:
            MinicError: With file name and source line attached
        """
        result = FrontendResult(filename=filename)

        try:
            result.tokens = list(Lexer(source, self.options.token_table).tokenize())
            result.tree = Parser(result.tokens).parse()
        except MinicError as e:
            logger.error(f"{filename}: {e.message}")
            e.with_context(source, filename)
            raise

        logger.debug(
            f"{filename}: {result.token_count} tokens, "
            f"{len(result.tree.statements)} top-level items"
        )
        return result

    def parse_file(self, filepath: str | Path) -> FrontendResult:
        """
        Lex and parse a source file.

        Raises:
            FileNotFoundError: If the source file does not exist
            MinicError: If the source does not parse
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding=self.options.encoding)
        return self.run(source, str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> StatementBlock:
    """
    Parse minic source text into a tree.

    This is a convenience function that combines lexing and parsing.

    Raises:
        MinicError: If lexing or parsing fails
    """
    return Frontend().run(source, filename).tree


def parse_file(filepath: str | Path) -> StatementBlock:
    """Parse a minic source file into a tree."""
    return Frontend().parse_file(filepath).tree
