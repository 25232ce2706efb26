"""
minic Lexer (Tokenizer)
=======================

This module converts minic source text into the token sequence the
parser consumes. It is a collaborator of the parser, not part of it:
the parser accepts any token sequence that honours the contract in
minic.tokens.

Token Categories
----------------
- Keywords: int, return, if, else, for
- Identifiers: variable and function names
- Literals: decimal integers
- Operators: + - * / = == != < > <= >= && || ! ++
- Punctuators: ( ) [ ] { } ; ,

The exact sets come from the TokenTable handed to the lexer.

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Example Usage
-------------
>>> from minic.lexer import Lexer
>>> for token in Lexer("int x = 1;").tokenize():
...     print(token)
Token(KEYWORD, 'int', @0)
Token(IDENTIFIER, 'x', @4)
Token(OPERATOR, '=', @6)
Token(LITERAL, '1', @8)
Token(PUNCTUATOR, ';', @9)
"""

import logging
import string
from typing import Iterator

from minic.errors import LexicalError
from minic.tokens import DEFAULT_TOKEN_TABLE, Token, TokenTable


logger = logging.getLogger(__name__)


class Lexer:
    """
    Tokenizes minic source code.

    Usage:
        lexer = Lexer(source_text)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        table: Classification table for keywords and symbols
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    def __init__(self, source: str, table: TokenTable = DEFAULT_TOKEN_TABLE):
        self.source = source
        self.table = table
        self._symbols = table.symbols
        self._pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        No end-of-file token is produced; the sequence simply ends.

        Raises:
            LexicalError: If a character cannot start any token, or a
                block comment is not terminated
        """
        count = 0
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()
            count += 1
        logger.debug(f"Tokenized {len(self.source)} characters into {count} tokens")

    # =========================================================================
    # Character Access
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r\f\v":
                self._pos += 1
                continue

            if char == "/" and self._peek(1) == "/":
                end = self.source.find("\n", self._pos)
                self._pos = len(self.source) if end == -1 else end
                continue

            if char == "/" and self._peek(1) == "*":
                end = self.source.find("*/", self._pos + 2)
                if end == -1:
                    raise LexicalError(
                        "/*",
                        offset=self._pos,
                        message="unterminated multi-line comment",
                        expected="'*/'",
                    )
                self._pos = end + 2
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start = self._pos
        char = self._peek()

        # Identifiers and keywords
        if char in self.IDENT_START:
            while self._peek() and self._peek() in self.IDENT_CHARS:
                self._pos += 1
            return self.table.make_token(self.source[start:self._pos], start)

        # Decimal literals
        if char and char in string.digits:
            while self._peek() and self._peek() in string.digits:
                self._pos += 1
            return self.table.make_token(self.source[start:self._pos], start)

        # Operators and punctuators, longest match first
        for symbol in self._symbols:
            if self.source.startswith(symbol, start):
                self._pos += len(symbol)
                return self.table.make_token(symbol, start)

        raise LexicalError(char, offset=start)


def tokenize(source: str, table: TokenTable = DEFAULT_TOKEN_TABLE) -> list[Token]:
    """Tokenize source text into a list of tokens."""
    return list(Lexer(source, table).tokenize())
