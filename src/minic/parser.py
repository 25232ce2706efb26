"""
minic Recursive Descent Parser
==============================

This module implements the recursive descent parser for minic. It takes
a sequence of tokens and builds the syntax tree defined in minic.ast,
returning a root StatementBlock that holds the top-level declarations
and statements.

Grammar (EBNF)
--------------
program         ::= top_level_item*
top_level_item  ::= function_decl | statement
function_decl   ::= 'int' IDENTIFIER '(' param_list? ')' block
param_list      ::= 'int' IDENTIFIER (',' 'int' IDENTIFIER)*
block           ::= '{' statement* '}'
statement       ::= return_stmt | if_stmt | for_stmt | var_decl
                  | block | call_stmt | post_inc_stmt
return_stmt     ::= 'return' logical_or? ';'
var_decl        ::= 'int' IDENTIFIER ('=' logical_or)? ';'
if_stmt         ::= 'if' '(' logical_or ')' statement ('else' statement)?
for_stmt        ::= 'for' '(' statement logical_or ';' statement ')' statement
call_stmt       ::= IDENTIFIER '(' arg_list? ')' ';'
post_inc_stmt   ::= IDENTIFIER '++' ';'

Expression Precedence (lowest to highest)
-----------------------------------------
1. logical_or      ||
2. logical_and     &&
3. comparison      == != > < >= <=
4. additive        + -
5. multiplicative  * /
6. factor          '!' factor | '(' logical_or ')' | LITERAL
                   | IDENTIFIER ('(' arg_list? ')')?

All binary operators are left-associative.

Disambiguation
--------------
There are no lookahead tables; a handful of fixed lookaheads decide:
- At top level, 'int' is a function declaration when the token two
  positions ahead is '('; otherwise it starts a statement.
- In statement position, 'int' not followed by '(' is a variable
  declaration.
- An identifier statement is a call when followed by '(' and a
  post-increment when followed by '++'. Anything else is an error.
- A for loop's initializer and update are whole statements (the
  initializer consumes its own ';'), while the condition is an
  expression followed by an explicit ';'. The update's trailing ';'
  may be left out right before the closing ')'.

The parser fails fast: the first violation raises a MinicSyntaxError
and no tree is returned. Nesting of statements, parentheses, "!" and
call arguments is capped at MAX_NESTING_DEPTH; deeper input raises
NestingTooDeepError rather than exhausting the Python stack.

Example Usage
-------------
>>> from minic.lexer import tokenize
>>> from minic.parser import Parser
>>> tree = Parser(tokenize("int main() { return 42; }")).parse()
>>> tree.statements[0].name
'main'
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from minic.ast import (
    BinaryOperator,
    Expression,
    ForStatement,
    FunctionCall,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    Literal,
    Node,
    Parameter,
    Statement,
    StatementBlock,
    StatementKind,
    UnaryOperator,
    VariableDeclaration,
)
from minic.errors import (
    MinicSyntaxError,
    MissingTokenError,
    NestingTooDeepError,
    UnexpectedTokenError,
)
from minic.tokens import Token, TokenKind


logger = logging.getLogger(__name__)


# Operator tiers, lowest precedence first
LOGICAL_OR_OPERATORS = frozenset({"||"})
LOGICAL_AND_OPERATORS = frozenset({"&&"})
COMPARISON_OPERATORS = frozenset({"==", "!=", ">", "<", ">=", "<="})
ADDITIVE_OPERATORS = frozenset({"+", "-"})
MULTIPLICATIVE_OPERATORS = frozenset({"*", "/"})

# Deepest nesting of statements, parentheses, "!" and call arguments.
# One expression level costs about a dozen Python frames, so this keeps
# a full-depth parse well inside the default recursion limit.
MAX_NESTING_DEPTH = 64


class Parser:
    """
    Recursive descent parser for minic.

    Holds an immutable token sequence and a single forward-only cursor.
    Every grammar rule either consumes tokens and returns a node or
    raises; there is no backtracking and no error recovery.

    A Parser is meant for one parse. Independent parsers share no state.

    Attributes:
        tokens: The token sequence being parsed
    """

    def __init__(self, tokens: Iterable[Token]):
        """
        Initialize the parser.

        Args:
            tokens: Tokens to parse; any iterable is materialised into a tuple
        """
        self.tokens: tuple[Token, ...] = tuple(tokens)

        # Current position in token stream
        self._pos = 0

        # Current and deepest nesting, checked against MAX_NESTING_DEPTH
        self._depth = 0
        self._deepest = 0

        # Returned by lookahead past the end. Its empty text never equals
        # a keyword or punctuator, so lookahead decisions fail safely.
        end_offset = self.tokens[-1].end_offset if self.tokens else 0
        self._end = Token(TokenKind.END, "", end_offset)

    def parse(self) -> StatementBlock:
        """
        Parse the token stream into a tree.

        Returns:
            Root StatementBlock holding top-level items in source order

        Raises:
            MinicSyntaxError: At the first grammar violation
        """
        logger.debug(f"Parsing {len(self.tokens)} tokens")
        offset = self._peek().offset
        items: list[Node] = []

        try:
            while not self._at_end():
                if self._match("int") and self._peek(2).text == "(":
                    items.append(self._parse_function_declaration())
                else:
                    items.append(self._parse_statement())
                logger.debug(f"Parsed top-level {items[-1].kind.name} at offset {items[-1].offset}")
        except RecursionError as e:
            # The stack ran out below MAX_NESTING_DEPTH (a lowered
            # recursion limit or an already deep caller)
            token = self._peek()
            raise NestingTooDeepError(token.text, token.offset, self._deepest) from e

        logger.debug(f"Parse finished with {len(items)} top-level items")
        return StatementBlock(offset=offset, statements=tuple(items))

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've consumed every token."""
        return self._pos >= len(self.tokens)

    def _peek(self, offset: int = 0) -> Token:
        """Look at token at current position + offset, or the end sentinel."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self._end
        return self.tokens[pos]

    def _match(self, text: str) -> bool:
        """True if the current token's text is exactly text. Never consumes."""
        if self._at_end():
            return False
        return self.tokens[self._pos].text == text

    def _consume(self) -> Token:
        """
        Consume and return the current token.

        At the end of the stream the cursor stays put and the last-seen
        token (or the sentinel, for an empty stream) is returned.
        """
        if not self._at_end():
            self._pos += 1
        if self._pos == 0:
            return self._end
        return self.tokens[self._pos - 1]

    def _expect(self, text: str) -> Token:
        """
        Expect and consume a token with exactly this text.

        Raises:
            MissingTokenError: If the current token does not match
        """
        if self._match(text):
            return self._consume()

        current = self._peek()
        raise MissingTokenError(current.text, text, current.offset)

    def _expect_identifier(self, what: str) -> Token:
        """Consume an identifier token, naming what it was meant to be on failure."""
        current = self._peek()
        if current.kind is not TokenKind.IDENTIFIER:
            raise UnexpectedTokenError(current.text, what, current.offset)
        return self._consume()

    def _enter(self, token: Token) -> None:
        """
        Step one nesting level deeper at token.

        Callers undo this with `self._depth -= 1` in a finally clause.

        Raises:
            NestingTooDeepError: Past MAX_NESTING_DEPTH
        """
        if self._depth >= MAX_NESTING_DEPTH:
            raise NestingTooDeepError(token.text, token.offset, MAX_NESTING_DEPTH)
        self._depth += 1
        self._deepest = max(self._deepest, self._depth)

    def _expect_terminator(self, closing: Optional[str]) -> None:
        """
        Expect the ';' ending a simple statement.

        When closing is given and is the current token, the ';' may be
        left out and closing is left for the caller to consume.
        """
        if closing is not None and self._match(closing):
            return
        self._expect(";")

    # =========================================================================
    # Declaration Parsing
    # =========================================================================

    def _parse_function_declaration(self) -> FunctionDeclaration:
        """Parse 'int' IDENTIFIER '(' param_list? ')' block."""
        type_token = self._expect("int")
        name_token = self._expect_identifier("function name")

        self._expect("(")
        parameters = self._parse_parameter_list()
        self._expect(")")

        body = self._parse_block()

        return FunctionDeclaration(
            offset=type_token.offset,
            return_type=type_token.text,
            name=name_token.text,
            parameters=parameters,
            body=body,
        )

    def _parse_parameter_list(self) -> tuple[Parameter, ...]:
        """
        Parse function parameters.

        The list is only entered when the first token is 'int'; anything
        else leaves it empty for the caller's ')' check to reject.
        """
        parameters = []

        if not self._match("int"):
            return ()

        while True:
            type_token = self._consume()
            name_token = self._expect_identifier("parameter name")
            parameters.append(Parameter(type_token.text, name_token.text))

            if not self._match(","):
                break
            self._consume()

            if not self._match("int"):
                current = self._peek()
                raise MissingTokenError(current.text, "int", current.offset)

        return tuple(parameters)

    def _parse_variable_declaration(self, closing: Optional[str] = None) -> VariableDeclaration:
        """Parse 'int' IDENTIFIER ('=' logical_or)? ';'."""
        type_token = self._expect("int")
        name_token = self._expect_identifier("variable name")

        initializer = None
        if self._match("="):
            self._consume()
            initializer = self._parse_logical_or()

        self._expect_terminator(closing)

        return VariableDeclaration(
            offset=type_token.offset,
            var_type=type_token.text,
            name=name_token.text,
            initializer=initializer,
        )

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_block(self) -> StatementBlock:
        """Parse a block statement { ... }."""
        brace = self._expect("{")

        statements = []
        while not self._match("}") and not self._at_end():
            statements.append(self._parse_statement())

        self._expect("}")

        return StatementBlock(offset=brace.offset, statements=tuple(statements))

    def _parse_statement(self, closing: Optional[str] = None) -> Node:
        """
        Parse any statement.

        Args:
            closing: Token that may stand in for the trailing ';' of a
                simple statement (used for a for loop's update clause)
        """
        token = self._peek()
        self._enter(token)

        try:
            if token.text == "return":
                return self._parse_return_statement(closing)
            if token.text == "if":
                return self._parse_if_statement()
            if token.text == "int" and self._peek(1).text != "(":
                return self._parse_variable_declaration(closing)
            if token.text == "for":
                return self._parse_for_statement()
            if token.text == "{":
                return self._parse_block()

            if token.kind is TokenKind.IDENTIFIER:
                following = self._peek(1).text
                if following == "(":
                    return self._parse_call_statement(closing)
                if following == "++":
                    return self._parse_post_increment_statement(closing)

            raise UnexpectedTokenError(token.text, "statement", token.offset)
        finally:
            self._depth -= 1

    def _parse_return_statement(self, closing: Optional[str] = None) -> Statement:
        """Parse 'return' logical_or? ';'."""
        keyword = self._expect("return")

        value = None
        if not self._match(";") and not (closing is not None and self._match(closing)):
            value = self._parse_logical_or()

        self._expect_terminator(closing)

        return Statement(offset=keyword.offset, stmt_kind=StatementKind.RETURN, expression=value)

    def _parse_if_statement(self) -> IfStatement:
        """Parse 'if' '(' logical_or ')' statement ('else' statement)?."""
        keyword = self._expect("if")
        self._expect("(")
        condition = self._parse_logical_or()
        self._expect(")")

        then_branch = self._parse_statement()

        else_branch = None
        if self._match("else"):
            self._consume()
            else_branch = self._parse_statement()

        return IfStatement(
            offset=keyword.offset,
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
        )

    def _parse_for_statement(self) -> ForStatement:
        """Parse 'for' '(' statement logical_or ';' statement ')' statement."""
        keyword = self._expect("for")
        self._expect("(")

        # The initializer statement consumes its own ';'
        initializer = self._parse_statement()

        condition = self._parse_logical_or()
        self._expect(";")

        update = self._parse_statement(closing=")")
        self._expect(")")

        body = self._parse_statement()

        return ForStatement(
            offset=keyword.offset,
            initializer=initializer,
            condition=condition,
            update=update,
            body=body,
        )

    def _parse_call_statement(self, closing: Optional[str] = None) -> FunctionCall:
        """Parse IDENTIFIER '(' arg_list? ')' ';'."""
        name_token = self._consume()
        call = self._parse_call(name_token)
        self._expect_terminator(closing)
        return call

    def _parse_post_increment_statement(self, closing: Optional[str] = None) -> UnaryOperator:
        """Parse IDENTIFIER '++' ';'."""
        name_token = self._consume()
        operator = self._expect("++")
        self._expect_terminator(closing)

        return UnaryOperator(
            offset=name_token.offset,
            value=operator.text,
            operand=Identifier(offset=name_token.offset, value=name_token.text),
        )

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _parse_logical_or(self) -> Expression:
        """Parse logical OR expression (||)."""
        return self._parse_binary(self._parse_logical_and, LOGICAL_OR_OPERATORS)

    def _parse_logical_and(self) -> Expression:
        """Parse logical AND expression (&&)."""
        return self._parse_binary(self._parse_comparison, LOGICAL_AND_OPERATORS)

    def _parse_comparison(self) -> Expression:
        """Parse comparison expression (== != > < >= <=)."""
        return self._parse_binary(self._parse_additive, COMPARISON_OPERATORS)

    def _parse_additive(self) -> Expression:
        """Parse additive expression (+ -)."""
        return self._parse_binary(self._parse_multiplicative, ADDITIVE_OPERATORS)

    def _parse_multiplicative(self) -> Expression:
        """Parse multiplicative expression (* /)."""
        return self._parse_binary(self._parse_factor, MULTIPLICATIVE_OPERATORS)

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: frozenset[str],
    ) -> Expression:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Function to parse operands (the next tier up)
            operators: Operator spellings handled at this tier
        """
        expr = operand_parser()

        while self._peek().text in operators:
            op_token = self._consume()
            right = operand_parser()
            expr = BinaryOperator(
                offset=expr.offset,
                value=op_token.text,
                left=expr,
                right=right,
            )

        return expr

    def _parse_factor(self) -> Expression:
        """Parse a factor: '!' factor, '(' expr ')', literal, identifier or call."""
        token = self._peek()

        # Logical not binds tighter than any binary operator
        if token.text == "!":
            self._enter(token)
            self._consume()
            try:
                operand = self._parse_factor()
            finally:
                self._depth -= 1
            return BinaryOperator(offset=token.offset, value="!", left=None, right=operand)

        # Parenthesized expression
        if token.text == "(":
            self._enter(token)
            self._consume()
            try:
                expr = self._parse_logical_or()
            finally:
                self._depth -= 1
            self._expect(")")
            return expr

        if token.kind is TokenKind.LITERAL:
            self._consume()
            return Literal(offset=token.offset, value=token.text)

        if token.kind is TokenKind.IDENTIFIER:
            self._consume()
            if self._match("("):
                return self._parse_call(token)
            return Identifier(offset=token.offset, value=token.text)

        raise UnexpectedTokenError(token.text, "expression", token.offset)

    def _parse_call(self, name_token: Token) -> FunctionCall:
        """Parse '(' arg_list? ')' after a callee name."""
        paren = self._expect("(")
        self._enter(paren)

        arguments = []
        try:
            if not self._match(")"):
                while True:
                    arguments.append(self._parse_logical_or())
                    if not self._match(","):
                        break
                    self._consume()
        finally:
            self._depth -= 1

        self._expect(")")

        return FunctionCall(
            offset=name_token.offset,
            value=name_token.text,
            arguments=tuple(arguments),
        )


# =============================================================================
# Result Type
# =============================================================================

@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of a parse: either a tree or the error that stopped it.

    Exactly one of tree and error is set.

    Attributes:
        tree: Root StatementBlock on success
        error: The first syntax error on failure
    """
    tree: Optional[StatementBlock] = None
    error: Optional[MinicSyntaxError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> StatementBlock:
        """Return the tree, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.tree


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tokens(tokens: Iterable[Token]) -> StatementBlock:
    """
    Parse a token sequence into a tree.

    Raises:
        MinicSyntaxError: At the first grammar violation
    """
    return Parser(tokens).parse()


def try_parse(tokens: Iterable[Token]) -> ParseResult:
    """Parse a token sequence, returning the failure as a value instead of raising."""
    try:
        return ParseResult(tree=Parser(tokens).parse())
    except MinicSyntaxError as e:
        logger.debug(f"Parse failed: {e.message}")
        return ParseResult(error=e)
