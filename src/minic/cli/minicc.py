"""
minicc - minic Front-End Command-Line Interface
===============================================

This module implements the command-line interface for the minic front
end. It lexes and parses a source file and reports the result, and can
dump the token stream or the syntax tree for debugging.

Usage Examples
--------------
Check that a file parses:
    $ minicc hello.c

Dump the syntax tree:
    $ minicc hello.c --ast

Dump the tokens to a file:
    $ minicc hello.c --tokens -o hello.tokens

Verbose mode (debug logging):
    $ minicc -v hello.c
"""

import logging
from pathlib import Path
from typing import Optional

import click

from minic import __version__
from minic.cli.errors import handle_cli_exception
from minic.frontend import Frontend, FrontendOptions


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the dump to this file instead of stdout",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream (offset, kind, text)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the syntax tree",
)
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    help="Text encoding of the source file and the dump",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.version_option(version=__version__, prog_name="minicc")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    ast: bool,
    encoding: str,
    verbose: bool,
) -> None:
    """
    Parse a minic source file.

    INPUT_FILE is the source file to parse. On success a one-line summary
    is printed; with --tokens and/or --ast the token stream and the tree
    are dumped instead.

    \b
    Examples:
        minicc hello.c                # Check that hello.c parses
        minicc hello.c --ast          # Print the syntax tree
        minicc hello.c --tokens       # Print the tokens
        minicc hello.c --ast -o t.txt # Write the tree to t.txt
        minicc hello.c --encoding latin-1 --ast
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if verbose:
            click.echo(f"Parsing {input_file}...")

        options = FrontendOptions(encoding=encoding)
        result = Frontend(options).parse_file(input_file)

        sections = []
        if tokens:
            sections.append(result.format_tokens())
        if ast:
            sections.append(result.format_tree())

        if not sections:
            click.echo(
                f"Parsed {input_file}: {len(result.tree.statements)} top-level items"
            )
            return

        text = "\n\n".join(sections)
        if output is not None:
            output.write_text(text + "\n", encoding=options.encoding)
            if verbose:
                click.echo(f"Wrote {len(text)} bytes to {output}")
        else:
            click.echo(text)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
