"""
minic Lexer Test Suite
======================

Tests for the token contract, the classification table and the lexer.

Test Organization
-----------------
- TestTokenTable: Classification of exact spellings
- TestLexer: Token generation from source text
- TestLexerErrors: Invalid characters and unterminated comments
"""

import dataclasses

import pytest

from minic.errors import LexicalError, MinicSyntaxError
from minic.lexer import Lexer, tokenize
from minic.tokens import DEFAULT_TOKEN_TABLE, Token, TokenKind, TokenTable


def texts(source):
    return [t.text for t in tokenize(source)]


# =============================================================================
# Classification Table Tests
# =============================================================================

class TestTokenTable:
    """Tests for TokenTable classification."""

    def test_keywords(self):
        """Reserved words classify as keywords."""
        for word in ("int", "return", "if", "else", "for"):
            assert DEFAULT_TOKEN_TABLE.classify(word) == TokenKind.KEYWORD

    def test_operators_and_punctuators(self):
        """Operator and delimiter spellings are told apart."""
        assert DEFAULT_TOKEN_TABLE.classify("&&") == TokenKind.OPERATOR
        assert DEFAULT_TOKEN_TABLE.classify("++") == TokenKind.OPERATOR
        assert DEFAULT_TOKEN_TABLE.classify("!") == TokenKind.OPERATOR
        assert DEFAULT_TOKEN_TABLE.classify(";") == TokenKind.PUNCTUATOR
        assert DEFAULT_TOKEN_TABLE.classify("[") == TokenKind.PUNCTUATOR

    def test_literal_and_identifier(self):
        """All-digit text is a literal, anything else an identifier."""
        assert DEFAULT_TOKEN_TABLE.classify("42") == TokenKind.LITERAL
        assert DEFAULT_TOKEN_TABLE.classify("x1") == TokenKind.IDENTIFIER
        assert DEFAULT_TOKEN_TABLE.classify("integer") == TokenKind.IDENTIFIER

    def test_symbols_longest_first(self):
        """Multi-character symbols come before their prefixes."""
        symbols = DEFAULT_TOKEN_TABLE.symbols
        assert symbols.index("++") < symbols.index("+")
        assert symbols.index("<=") < symbols.index("<")
        assert symbols.index("==") < symbols.index("=")

    def test_table_is_immutable(self):
        """A table cannot be changed once built."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_TOKEN_TABLE.keywords = frozenset()

    def test_custom_table(self):
        """A different table changes classification without touching the default."""
        table = TokenTable(
            keywords=DEFAULT_TOKEN_TABLE.keywords | {"while"},
            operators=DEFAULT_TOKEN_TABLE.operators,
            punctuators=DEFAULT_TOKEN_TABLE.punctuators,
        )
        assert table.classify("while") == TokenKind.KEYWORD
        assert DEFAULT_TOKEN_TABLE.classify("while") == TokenKind.IDENTIFIER

    def test_token_end_offset(self):
        """end_offset points just past the token text."""
        token = Token(TokenKind.KEYWORD, "return", 10)
        assert token.end_offset == 16


# =============================================================================
# Lexer Tests
# =============================================================================

class TestLexer:
    """Tests for the minic lexer."""

    def test_empty_source(self):
        """Empty source produces no tokens (there is no EOF token)."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        """Whitespace-only source produces no tokens."""
        assert tokenize("   \n\t  \r\n  ") == []

    def test_declaration(self):
        """A declaration lexes into classified tokens with offsets."""
        tokens = tokenize("int x = 1;")
        assert tokens == [
            Token(TokenKind.KEYWORD, "int", 0),
            Token(TokenKind.IDENTIFIER, "x", 4),
            Token(TokenKind.OPERATOR, "=", 6),
            Token(TokenKind.LITERAL, "1", 8),
            Token(TokenKind.PUNCTUATOR, ";", 9),
        ]

    def test_longest_match(self):
        """Two-character operators win over their one-character prefixes."""
        assert texts("a<=b==c!=d&&e||f") == [
            "a", "<=", "b", "==", "c", "!=", "d", "&&", "e", "||", "f",
        ]
        assert texts("i++") == ["i", "++"]
        assert texts("i + +j") == ["i", "+", "+", "j"]

    def test_keyword_prefix_is_identifier(self):
        """Identifiers that merely start with a keyword stay identifiers."""
        tokens = tokenize("iffy format return_value")
        assert [t.kind for t in tokens] == [TokenKind.IDENTIFIER] * 3

    def test_single_line_comment(self):
        """// comments run to end of line."""
        assert texts("int x; // trailing\nint y;") == ["int", "x", ";", "int", "y", ";"]

    def test_comment_at_end_without_newline(self):
        """A // comment may end the source."""
        assert texts("x++; // done") == ["x", "++", ";"]

    def test_multi_line_comment(self):
        """/* */ comments may span lines."""
        assert texts("int /* a\n b */ x;") == ["int", "x", ";"]

    def test_offsets_skip_comments(self):
        """Offsets are positions in the source text."""
        tokens = tokenize("/* c */ return 0;")
        assert tokens[0].offset == 8
        assert tokens[1].offset == 15

    def test_lexer_is_lazy(self):
        """tokenize() on a Lexer yields tokens one at a time."""
        stream = Lexer("int x;").tokenize()
        assert next(stream).text == "int"


# =============================================================================
# Lexer Error Tests
# =============================================================================

class TestLexerErrors:
    """Tests for lexer error reporting."""

    def test_invalid_character(self):
        """A character that starts no token raises LexicalError."""
        with pytest.raises(LexicalError) as exc_info:
            tokenize("int x = 1 @ 2;")
        assert exc_info.value.char == "@"
        assert exc_info.value.offset == 10
        assert "invalid character '@'" in str(exc_info.value)

    def test_lexical_error_is_syntax_error(self):
        """LexicalError can be caught as a MinicSyntaxError."""
        with pytest.raises(MinicSyntaxError):
            tokenize("$")

    def test_non_ascii_digit_rejected(self):
        """Only ASCII digits form literals."""
        with pytest.raises(LexicalError):
            tokenize("٣")

    def test_unterminated_comment(self):
        """An unclosed block comment is a lexical error at its start."""
        with pytest.raises(LexicalError) as exc_info:
            tokenize("int x; /* never closed")
        error = exc_info.value
        assert error.offset == 7
        assert error.char == "/*"
        assert error.found == "/*"
        assert error.expected == "'*/'"
        assert str(error) == "offset 7: error: unterminated multi-line comment\nhint: expected '*/'"
