"""
minic Command-Line Interface
============================

This package provides the command-line tool for the minic front end:

- **minicc**: lex and parse a source file, optionally dumping tokens or the AST

The tool is a Click application with help text and unified error
reporting (see minic.cli.errors).
"""

__all__ = ["minicc"]
