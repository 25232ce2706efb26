"""
minic Token Contract
====================

The parser consumes an ordered, finite sequence of tokens. Each token
carries a classification, its exact text and the source offset where it
starts. The grammar matches tokens by exact text ("int", "{", "&&");
the kind only separates literals from identifiers.

Classification is driven by a TokenTable: an immutable value listing
the keyword, operator and punctuator spellings. Lexers receive the table
they should use; DEFAULT_TOKEN_TABLE describes the standard language.

Example Usage
-------------
>>> from minic.tokens import DEFAULT_TOKEN_TABLE, TokenKind
>>> DEFAULT_TOKEN_TABLE.classify("return")
<TokenKind.KEYWORD: 'keyword'>
>>> DEFAULT_TOKEN_TABLE.classify("42")
<TokenKind.LITERAL: 'literal'>
"""

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Token Kinds
# =============================================================================

class TokenKind(Enum):
    """Classification of a token."""
    KEYWORD = "keyword"          # int, return, if, else, for
    IDENTIFIER = "identifier"    # variable/function names
    LITERAL = "literal"          # decimal integer constants
    OPERATOR = "operator"        # + - * / == && ! ++ ...
    PUNCTUATOR = "punctuator"    # ( ) { } [ ] ; ,
    END = "end"                  # parser's end-of-stream sentinel only


# =============================================================================
# Token
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexical unit.

    Attributes:
        kind: The TokenKind classification
        text: The exact source text of the token
        offset: 0-based character offset of the token start
    """
    kind: TokenKind
    text: str
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, @{self.offset})"

    @property
    def end_offset(self) -> int:
        """Offset just past the last character of this token."""
        return self.offset + len(self.text)


# =============================================================================
# Classification Table
# =============================================================================

@dataclass(frozen=True)
class TokenTable:
    """
    Immutable keyword / operator / punctuator table.

    Exact spellings listed here classify as KEYWORD, OPERATOR or
    PUNCTUATOR. Any other all-digit string is a LITERAL, and everything
    else is an IDENTIFIER.

    Attributes:
        keywords: Reserved words
        operators: Operator spellings
        punctuators: Delimiter spellings
    """
    keywords: frozenset[str]
    operators: frozenset[str]
    punctuators: frozenset[str]

    def classify(self, text: str) -> TokenKind:
        """Return the TokenKind for an exact token spelling."""
        if text in self.keywords:
            return TokenKind.KEYWORD
        if text in self.operators:
            return TokenKind.OPERATOR
        if text in self.punctuators:
            return TokenKind.PUNCTUATOR
        if text.isascii() and text.isdigit():
            return TokenKind.LITERAL
        return TokenKind.IDENTIFIER

    @property
    def symbols(self) -> tuple[str, ...]:
        """
        Operator and punctuator spellings, longest first.

        Longest-first order lets a scanner take "++" before "+" and
        "<=" before "<" with a simple prefix test.
        """
        return tuple(sorted(self.operators | self.punctuators, key=lambda s: (-len(s), s)))

    def make_token(self, text: str, offset: int) -> Token:
        """Create a token, classifying its text with this table."""
        return Token(self.classify(text), text, offset)


DEFAULT_TOKEN_TABLE = TokenTable(
    keywords=frozenset({"int", "return", "if", "else", "for"}),
    operators=frozenset({
        "+", "-", "*", "/", "=",
        "==", "!=", "<", ">", "<=", ">=",
        "&&", "||", "!", "++",
    }),
    punctuators=frozenset({"(", ")", "[", "]", "{", "}", ";", ","}),
)
