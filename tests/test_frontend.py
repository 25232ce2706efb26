"""
minic Front End and CLI Test Suite
==================================

Tests for the lexer + parser pipeline, error context and the minicc
command-line tool.
"""

import pytest
from click.testing import CliRunner

from minic import __version__
from minic.ast import FunctionDeclaration
from minic.cli.errors import ExitCode
from minic.cli.minicc import main
from minic.errors import MinicError, MissingTokenError, SourceLocation, UnexpectedTokenError
from minic.frontend import Frontend, FrontendOptions, parse_file, parse_source
from minic.tokens import DEFAULT_TOKEN_TABLE, TokenKind, TokenTable


HELLO = """\
// hello.c
int add(int a, int b) {
    return a + b;
}

int main() {
    int x = add(1, 2);
    return x;
}
"""


# =============================================================================
# Front End Tests
# =============================================================================

class TestFrontend:
    """Tests for the Frontend pipeline."""

    def test_parse_source(self):
        """Source text parses into a root block."""
        tree = parse_source(HELLO)
        assert [f.name for f in tree.statements] == ["add", "main"]
        assert all(isinstance(f, FunctionDeclaration) for f in tree.statements)

    def test_run_keeps_tokens(self):
        """The result carries the tokens as well as the tree."""
        result = Frontend().run("int x;", "x.c")
        assert result.filename == "x.c"
        assert result.token_count == 3
        assert result.tree.statements[0].name == "x"

    def test_format_tokens(self):
        """Token dump has one aligned line per token."""
        result = Frontend().run("int x;")
        assert result.format_tokens().splitlines() == [
            "     0  keyword     int",
            "     4  identifier  x",
            "     5  punctuator  ;",
        ]

    def test_format_tree(self):
        """Tree dump uses the AST printer."""
        result = Frontend().run("int x;")
        assert result.format_tree() == "StatementBlock\n  VariableDeclaration: int x"

    def test_error_gets_location(self):
        """Errors are given a file name, line and column."""
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("int x = 1\nreturn 2;", "t.c")
        error = exc_info.value
        assert error.location == SourceLocation("t.c", 2, 1)
        assert error.source_line == "return 2;"
        assert str(error).splitlines() == [
            "t.c:2:1: error: expected ';', found 'return'",
            "    return 2;",
            "    ^",
            "hint: expected ';'",
        ]

    def test_error_without_context(self):
        """Errors raised straight from the parser report an offset."""
        error = UnexpectedTokenError(")", "statement", 4)
        assert str(error) == "offset 4: error: unexpected token ')'\nhint: expected statement"

    def test_custom_token_table(self):
        """The options select the classification table."""
        table = TokenTable(
            keywords=DEFAULT_TOKEN_TABLE.keywords | {"while"},
            operators=DEFAULT_TOKEN_TABLE.operators,
            punctuators=DEFAULT_TOKEN_TABLE.punctuators,
        )
        frontend = Frontend(FrontendOptions(token_table=table))
        with pytest.raises(UnexpectedTokenError) as exc_info:
            frontend.run("while(1);")
        assert exc_info.value.found == "while"

        # The default table treats it as a call
        result = Frontend().run("while(1);")
        assert result.tokens[0].kind == TokenKind.IDENTIFIER

    def test_parse_file(self, tmp_path):
        """Files are read and parsed."""
        source = tmp_path / "hello.c"
        source.write_text(HELLO)
        tree = parse_file(source)
        assert len(tree.statements) == 2

    def test_parse_file_missing(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "nope.c")

    def test_lexical_error_is_minic_error(self):
        """Lexer failures surface through the same hierarchy."""
        with pytest.raises(MinicError) as exc_info:
            parse_source("int x = 1 # 2;", "bad.c")
        assert str(exc_info.value).startswith("bad.c:1:11: error: invalid character '#'")


# =============================================================================
# CLI Tests
# =============================================================================

class TestMiniccCLI:
    """Tests for the minicc CLI tool."""

    def test_cli_help(self):
        """Test CLI help output."""
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Parse a minic source file" in result.output

    def test_cli_version(self):
        """Test CLI version output."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_cli_summary(self, tmp_path):
        """Without dump flags a one-line summary is printed."""
        source = tmp_path / "hello.c"
        source.write_text(HELLO)

        runner = CliRunner()
        result = runner.invoke(main, [str(source)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "2 top-level items" in result.output

    def test_cli_ast(self, tmp_path):
        """--ast prints the tree."""
        source = tmp_path / "hello.c"
        source.write_text(HELLO)

        runner = CliRunner()
        result = runner.invoke(main, [str(source), "--ast"])

        assert result.exit_code == 0
        assert "FunctionDeclaration: int add(int a, int b)" in result.output
        assert "FunctionCall: add" in result.output

    def test_cli_tokens_to_file(self, tmp_path):
        """--tokens with -o writes the dump to a file."""
        source = tmp_path / "hello.c"
        source.write_text("int x;")
        out = tmp_path / "hello.tokens"

        runner = CliRunner()
        result = runner.invoke(main, [str(source), "--tokens", "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_text().splitlines()[0] == "     0  keyword     int"

    def test_cli_syntax_error(self, tmp_path):
        """Syntax errors exit with the build-error code."""
        source = tmp_path / "bad.c"
        source.write_text("int main() {\n    return 1\n}\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(source)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "bad.c:3:1: error: expected ';', found '}'" in result.output

    def test_cli_missing_file(self, tmp_path):
        """A missing input file is a usage error."""
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.c")])

        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_cli_deep_nesting(self, tmp_path):
        """Input nested past the parser limit is a syntax error, not an internal one."""
        source = tmp_path / "deep.c"
        source.write_text("int x = " + "(" * 400 + "1" + ")" * 400 + ";\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(source)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "nesting deeper than 64 levels" in result.output

    def test_cli_encoding(self, tmp_path):
        """--encoding applies to the source file and to the -o dump."""
        source = tmp_path / "wide.c"
        source.write_text("// café\nint x;\n", encoding="utf-16")
        out = tmp_path / "wide.ast"

        runner = CliRunner()
        result = runner.invoke(
            main, [str(source), "--ast", "--encoding", "utf-16", "-o", str(out)]
        )

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-16") == (
            "StatementBlock\n  VariableDeclaration: int x\n"
        )

    def test_cli_dump_is_utf8_by_default(self, tmp_path):
        """Without --encoding the dump is written as UTF-8."""
        source = tmp_path / "hello.c"
        source.write_text("/* é */ int x;", encoding="utf-8")
        out = tmp_path / "hello.tokens"

        runner = CliRunner()
        result = runner.invoke(main, [str(source), "--tokens", "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_bytes().decode("utf-8").startswith("     8  keyword     int")

    def test_cli_unknown_encoding(self, tmp_path):
        """An unknown encoding name is a usage error."""
        source = tmp_path / "hello.c"
        source.write_text("int x;")

        runner = CliRunner()
        result = runner.invoke(main, [str(source), "--encoding", "no-such-codec"])

        assert result.exit_code == ExitCode.INVALID_ARGS
