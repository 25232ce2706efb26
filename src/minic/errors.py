"""
minic Error Hierarchy
=====================

This module defines the exception hierarchy for the minic front end.
All exceptions inherit from MinicError, allowing callers to catch every
front-end failure with a single except clause.

Exception Hierarchy
-------------------
MinicError (base)
└── MinicSyntaxError - grammar violation, carries found/expected/offset
    ├── UnexpectedTokenError - token not allowed at this position
    ├── MissingTokenError - a required token was not found
    ├── NestingTooDeepError - constructs nested past the parser limit
    └── LexicalError - text that starts no token

Error Message Format
--------------------
Errors carry the offending token text, the expected text (when known)
and the token's source offset:

    offset 14: error: unexpected token ')'
    hint: expected statement

When the front end knows the file name and source text it attaches
them, and the message gains a line/column prefix and a caret line:

    hello.c:2:5: error: unexpected token ')'
        ) return 1;
        ^
    hint: expected statement

The parser aborts on the first error; there is no error collection.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A line/column position in a named source, for error reporting.

    Tokens only carry a character offset; a SourceLocation is derived
    from that offset once the source text is known.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"

    @classmethod
    def from_offset(cls, source: str, offset: int, filename: str = "<input>") -> "SourceLocation":
        """
        Convert a 0-based character offset into a line/column location.

        Offsets past the end of the source are clamped to the end.
        """
        offset = max(0, min(offset, len(source)))
        line = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(filename, line, offset - line_start + 1)


def source_line_at(source: str, offset: int) -> str:
    """Return the full text of the line containing offset."""
    offset = max(0, min(offset, len(source)))
    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    return source[line_start:line_end]


# =============================================================================
# Base Exception
# =============================================================================

class MinicError(Exception):
    """
    Base exception for all minic errors.

    Provides message formatting with optional source location, source
    line context and a hint.

    Attributes:
        message: The error description
        offset: Source offset of the error (-1 when unknown)
        location: Line/column location, once known
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        offset: int = -1,
        hint: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.offset = offset
        self.hint = hint
        self.location = location
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            hello.c:5:12: error: unexpected token ')'
                printt(1));
                          ^
            hint: expected ';'
        """
        parts = []

        # Location prefix
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        elif self.offset >= 0:
            parts.append(f"offset {self.offset}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def with_context(self, source: str, filename: str = "<input>") -> "MinicError":
        """
        Attach file name and source line context to this error.

        Returns the same exception object with its message rebuilt, so it
        can be re-raised in place.
        """
        if self.offset >= 0:
            self.location = SourceLocation.from_offset(source, self.offset, filename)
            self.source_line = source_line_at(source, self.offset)
        return self

    def __str__(self) -> str:
        return self._format_message()


# =============================================================================
# Syntax Errors
# =============================================================================

class MinicSyntaxError(MinicError):
    """
    Syntax error in minic source.

    Raised at the first grammar violation; parsing aborts and no tree
    is produced.

    Attributes:
        found: Text of the offending token ("" at end of input)
        expected: What the grammar required there, if known
    """

    def __init__(
        self,
        message: str,
        found: str = "",
        expected: Optional[str] = None,
        offset: int = -1,
        hint: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected
        if hint is None and expected:
            hint = f"expected {expected}"
        super().__init__(message, offset=offset, hint=hint)


def _describe(found: str) -> str:
    return f"'{found}'" if found else "end of input"


class UnexpectedTokenError(MinicSyntaxError):
    """
    Unexpected token during parsing.

    Raised when the current token cannot start the construct the
    grammar requires at this position (a factor, a statement, a name).
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        offset: int = -1,
    ):
        message = f"unexpected token {_describe(found)}" if found else "unexpected end of input"
        super().__init__(message, found=found, expected=expected, offset=offset)


class MissingTokenError(MinicSyntaxError):
    """
    Required token is missing.

    Raised when a required token (like ';' or ')') is not found
    where expected.
    """

    def __init__(
        self,
        found: str,
        expected: str,
        offset: int = -1,
    ):
        super().__init__(
            f"expected '{expected}', found {_describe(found)}",
            found=found,
            expected=expected,
            offset=offset,
            hint=f"expected '{expected}'",
        )


class NestingTooDeepError(MinicSyntaxError):
    """
    Statements or expressions nested past the parser's depth limit.

    Raised instead of letting deeply nested input exhaust the Python
    stack, so the failure stays a syntax error at a known offset.

    Attributes:
        limit: The nesting depth that was exceeded
    """

    def __init__(self, found: str, offset: int = -1, limit: int = 0):
        self.limit = limit
        super().__init__(
            f"nesting deeper than {limit} levels at {_describe(found)}",
            found=found,
            expected="shallower nesting",
            offset=offset,
        )


class LexicalError(MinicSyntaxError):
    """
    Source text that starts no token.

    Raised by the lexer, never by the parser: for a character outside
    every token class, and for a block comment with no closing '*/'.

    Attributes:
        char: The offending text ("/*" for an unterminated comment)
    """

    def __init__(
        self,
        char: str,
        offset: int = -1,
        message: Optional[str] = None,
        expected: Optional[str] = None,
    ):
        self.char = char
        if message is None:
            message = f"invalid character '{char}' (0x{ord(char):02X})"
        super().__init__(message, found=char, expected=expected, offset=offset)
