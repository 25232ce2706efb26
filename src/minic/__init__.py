"""
minic - Front End for a Minimal C-like Language
===============================================

This package turns source code in a small C-like language into an
abstract syntax tree. The language has a single `int` type, functions
with typed parameters, arithmetic / comparison / logical operators,
`if` / `for` / `return` statements, function calls and a postfix
increment statement.

Main Components
---------------
- **tokens**: token contract and the immutable classification table
- **lexer**: source text to tokens
- **parser**: recursive descent parser with precedence climbing
- **ast**: syntax-tree node model, visitor and printer
- **frontend**: lexer + parser pipeline over strings and files

Quick Start
-----------
    >>> from minic import parse_source
    >>> tree = parse_source("int add(int a, int b) { return a + b; }")
    >>> tree.statements[0].name
    'add'

Parsing an existing token sequence:
    >>> from minic import tokenize, try_parse
    >>> result = try_parse(tokenize("return 1 + ;"))
    >>> result.ok
    False

Or use the command-line tool:
    $ minicc program.c --ast
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from minic.errors import (
    MinicError,
    MinicSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    NestingTooDeepError,
    LexicalError,
    SourceLocation,
)
from minic.tokens import Token, TokenKind, TokenTable, DEFAULT_TOKEN_TABLE
from minic.lexer import Lexer, tokenize
from minic.parser import Parser, ParseResult, parse_tokens, try_parse
from minic.frontend import Frontend, FrontendOptions, FrontendResult, parse_source, parse_file
from minic.ast import (
    NodeKind,
    StatementKind,
    ExpressionKind,
    Node,
    Expression,
    StatementBlock,
    Statement,
    VariableDeclaration,
    Parameter,
    FunctionDeclaration,
    IfStatement,
    ForStatement,
    Literal,
    Identifier,
    BinaryOperator,
    UnaryOperator,
    FunctionCall,
    ASTVisitor,
    ASTPrinter,
    walk,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "MinicError",
    "MinicSyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "NestingTooDeepError",
    "LexicalError",
    "SourceLocation",
    # Tokens and lexer
    "Token",
    "TokenKind",
    "TokenTable",
    "DEFAULT_TOKEN_TABLE",
    "Lexer",
    "tokenize",
    # Parser
    "Parser",
    "ParseResult",
    "parse_tokens",
    "try_parse",
    # Front end
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "parse_source",
    "parse_file",
    # AST
    "NodeKind",
    "StatementKind",
    "ExpressionKind",
    "Node",
    "Expression",
    "StatementBlock",
    "Statement",
    "VariableDeclaration",
    "Parameter",
    "FunctionDeclaration",
    "IfStatement",
    "ForStatement",
    "Literal",
    "Identifier",
    "BinaryOperator",
    "UnaryOperator",
    "FunctionCall",
    "ASTVisitor",
    "ASTPrinter",
    "walk",
]
