"""
minic Abstract Syntax Tree (AST) Definitions
============================================

This module defines the syntax-tree node types produced by the minic
parser, plus the read-only traversal helpers consumers use.

Node Hierarchy
--------------
Node (base)
├── StatementBlock - { ... } and the parse root
├── VariableDeclaration - int x [= expr];
├── FunctionDeclaration - int f(int a, ...) { ... }
├── IfStatement - if (cond) stmt [else stmt]
├── ForStatement - for (stmt cond; stmt) stmt
├── Statement - return [expr]; (RETURN) or an empty statement (EMPTY)
└── Expression
    ├── Literal - integer constant
    ├── Identifier - variable reference
    ├── BinaryOperator - a op b, and unary '!' (operand in 'right')
    ├── UnaryOperator - postfix '++'
    └── FunctionCall - f(args)

Design Notes
------------
- The variant set is closed: every node reports a NodeKind, and
  expressions and statements add a finer ExpressionKind/StatementKind.
- Nodes are frozen dataclasses and sequences are tuples, so a tree
  cannot be changed after the parser builds it.
- Each node exclusively owns its children. There are no parent links
  and no node is shared between two parents; dropping the root
  releases the whole tree.
- Each node records the source offset of the token that starts it.
- Child fields the grammar requires are typed Optional only because
  they default to None; the parser always fills them.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, ClassVar, Iterator, Optional


# =============================================================================
# Node Kinds
# =============================================================================

class NodeKind(Enum):
    """Coarse node classification used for kind dispatch."""
    STATEMENT = auto()
    STMT_BLOCK = auto()
    EXPRESSION = auto()
    VAR_DECL = auto()
    FUNC_DECL = auto()
    FUNC_CALL = auto()
    IF_STATEMENT = auto()
    FOR_STATEMENT = auto()


class StatementKind(Enum):
    """Kinds of plain Statement nodes."""
    RETURN = auto()
    EMPTY = auto()


class ExpressionKind(Enum):
    """Kinds of Expression nodes."""
    LITERAL = auto()
    IDENTIFIER = auto()
    BINARY_OPERATOR = auto()
    UNARY_OPERATOR = auto()
    FUNCTION_CALL = auto()


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class Node:
    """
    Base class for all AST nodes.

    Attributes:
        offset: Source offset of the first token of this node
    """
    offset: int

    kind: ClassVar[NodeKind]

    def children(self) -> tuple["Node", ...]:
        """
        Return the owned child nodes in field order.

        Absent optional children are skipped. A StatementBlock returns
        its statements; other kinds return their typed fields so that
        kind-agnostic traversal needs no per-kind code.
        """
        return ()


@dataclass(frozen=True)
class Expression(Node):
    """
    Base class for all expression nodes.

    Attributes:
        value: Literal text, identifier name, operator symbol or callee name
    """
    value: str = ""

    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION
    expr_kind: ClassVar[ExpressionKind]


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class StatementBlock(Node):
    """
    Ordered sequence of statements.

    Used both for function bodies and for the parse root, where it
    holds the top-level declarations and statements.

    Attributes:
        statements: Statements in source order (may be empty)
    """
    statements: tuple[Node, ...] = ()

    kind: ClassVar[NodeKind] = NodeKind.STMT_BLOCK

    def children(self) -> tuple[Node, ...]:
        return self.statements


@dataclass(frozen=True)
class Statement(Node):
    """
    Return or empty statement.

    Attributes:
        stmt_kind: RETURN or EMPTY
        expression: Returned value (RETURN only, optional)
    """
    stmt_kind: StatementKind = StatementKind.EMPTY
    expression: Optional[Expression] = None

    kind: ClassVar[NodeKind] = NodeKind.STATEMENT

    @property
    def is_return(self) -> bool:
        return self.stmt_kind is StatementKind.RETURN

    def children(self) -> tuple[Node, ...]:
        return _present(self.expression)


@dataclass(frozen=True)
class VariableDeclaration(Node):
    """
    Variable declaration, optionally initialised.

        int x;
        int y = f(1) + 2;

    Attributes:
        var_type: Type name (always "int")
        name: Variable name
        initializer: Optional initialisation expression
    """
    var_type: str = "int"
    name: str = ""
    initializer: Optional[Expression] = None

    kind: ClassVar[NodeKind] = NodeKind.VAR_DECL

    def children(self) -> tuple[Node, ...]:
        return _present(self.initializer)


@dataclass(frozen=True)
class Parameter:
    """A (type, name) pair in a function declaration's parameter list."""
    param_type: str
    name: str

    def __str__(self) -> str:
        return f"{self.param_type} {self.name}"


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    """
    Function definition.

    Attributes:
        return_type: The return type name
        name: Function name
        parameters: Ordered parameter list
        body: The function body
    """
    return_type: str = "int"
    name: str = ""
    parameters: tuple[Parameter, ...] = ()
    body: Optional[StatementBlock] = None

    kind: ClassVar[NodeKind] = NodeKind.FUNC_DECL

    def children(self) -> tuple[Node, ...]:
        return _present(self.body)


@dataclass(frozen=True)
class IfStatement(Node):
    """
    If statement with optional else clause.

    Attributes:
        condition: The condition expression
        then_branch: Statement executed if condition is true
        else_branch: Optional statement executed if condition is false
    """
    condition: Optional[Expression] = None
    then_branch: Optional[Node] = None
    else_branch: Optional[Node] = None

    kind: ClassVar[NodeKind] = NodeKind.IF_STATEMENT

    def children(self) -> tuple[Node, ...]:
        return _present(self.condition, self.then_branch, self.else_branch)


@dataclass(frozen=True)
class ForStatement(Node):
    """
    For loop. All four parts are required.

    The initializer and update are whole statements (the initializer
    may be a declaration); the condition is an expression.

    Attributes:
        initializer: Statement run once before the loop
        condition: Loop condition
        update: Statement run after each iteration
        body: Loop body statement
    """
    initializer: Optional[Node] = None
    condition: Optional[Expression] = None
    update: Optional[Node] = None
    body: Optional[Node] = None

    kind: ClassVar[NodeKind] = NodeKind.FOR_STATEMENT

    def children(self) -> tuple[Node, ...]:
        return _present(self.initializer, self.condition, self.update, self.body)


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class Literal(Expression):
    """Integer literal; value is its source text."""
    expr_kind: ClassVar[ExpressionKind] = ExpressionKind.LITERAL


@dataclass(frozen=True)
class Identifier(Expression):
    """Variable reference; value is the name."""
    expr_kind: ClassVar[ExpressionKind] = ExpressionKind.IDENTIFIER


@dataclass(frozen=True)
class BinaryOperator(Expression):
    """
    Binary operation (left op right).

    Logical not is stored here too, as value "!" with no left operand
    and its operand in right.

    Attributes:
        left: Left operand (None only for "!")
        right: Right operand
    """
    left: Optional[Expression] = None
    right: Optional[Expression] = None

    expr_kind: ClassVar[ExpressionKind] = ExpressionKind.BINARY_OPERATOR

    @property
    def is_logical_not(self) -> bool:
        return self.value == "!" and self.left is None

    def children(self) -> tuple[Node, ...]:
        return _present(self.left, self.right)


@dataclass(frozen=True)
class UnaryOperator(Expression):
    """
    Postfix unary operation (operand op); currently only "++".

    Attributes:
        operand: The operand expression
    """
    operand: Optional[Expression] = None

    expr_kind: ClassVar[ExpressionKind] = ExpressionKind.UNARY_OPERATOR

    def children(self) -> tuple[Node, ...]:
        return _present(self.operand)


@dataclass(frozen=True)
class FunctionCall(Expression):
    """
    Function call expression; value is the callee name.

    The argument count is not checked against any declaration.

    Attributes:
        arguments: Argument expressions in source order
    """
    arguments: tuple[Expression, ...] = ()

    kind: ClassVar[NodeKind] = NodeKind.FUNC_CALL
    expr_kind: ClassVar[ExpressionKind] = ExpressionKind.FUNCTION_CALL

    @property
    def name(self) -> str:
        return self.value

    def children(self) -> tuple[Node, ...]:
        return self.arguments


def _present(*nodes: Optional[Node]) -> tuple[Node, ...]:
    return tuple(node for node in nodes if node is not None)


# =============================================================================
# Traversal
# =============================================================================

def walk(root: Node) -> Iterator[tuple[int, Node]]:
    """
    Yield (depth, node) pairs in pre-order, root first at depth 0.

    The walk only reads the tree, so walking the same tree twice yields
    the same sequence.
    """
    stack = [(0, root)]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        for child in reversed(node.children()):
            stack.append((depth + 1, child))


class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches on the node's class name to visit_<ClassName>. Subclasses
    override the methods for the node types they care about; anything
    else falls through to generic_visit, which visits the children.

    Usage:
        class CallCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_FunctionCall(self, node):
                self.names.append(node.name)
                self.generic_visit(node)

        collector = CallCollector()
        collector.visit(tree)
    """

    def visit(self, node: Node) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Node) -> None:
        for child in node.children():
            self.visit(child)

    def visit_StatementBlock(self, node: StatementBlock): return self.generic_visit(node)
    def visit_Statement(self, node: Statement): return self.generic_visit(node)
    def visit_VariableDeclaration(self, node: VariableDeclaration): return self.generic_visit(node)
    def visit_FunctionDeclaration(self, node: FunctionDeclaration): return self.generic_visit(node)
    def visit_IfStatement(self, node: IfStatement): return self.generic_visit(node)
    def visit_ForStatement(self, node: ForStatement): return self.generic_visit(node)
    def visit_Literal(self, node: Literal): return self.generic_visit(node)
    def visit_Identifier(self, node: Identifier): return self.generic_visit(node)
    def visit_BinaryOperator(self, node: BinaryOperator): return self.generic_visit(node)
    def visit_UnaryOperator(self, node: UnaryOperator): return self.generic_visit(node)
    def visit_FunctionCall(self, node: FunctionCall): return self.generic_visit(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces one line per node, indented two spaces per level:

        StatementBlock
          FunctionDeclaration: int add(int a, int b)
            StatementBlock
              ReturnStatement
                BinaryOperator: +
                  IdentifierExpression: a
                  IdentifierExpression: b

    Usage:
        printer = ASTPrinter()
        print(printer.print(tree))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: Node) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _section(self, label: str, node: Optional[Node]) -> None:
        """Emit a labelled sub-tree one level deeper."""
        if node is None:
            return
        self._emit(f"{label}:")
        self.indent_level += 1
        self.visit(node)
        self.indent_level -= 1

    def generic_visit(self, node: Node) -> None:
        self.indent_level += 1
        for child in node.children():
            self.visit(child)
        self.indent_level -= 1

    def visit_StatementBlock(self, node: StatementBlock):
        self._emit("StatementBlock")
        self.generic_visit(node)

    def visit_Statement(self, node: Statement):
        self._emit("ReturnStatement" if node.is_return else "EmptyStatement")
        self.generic_visit(node)

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        self._emit(f"VariableDeclaration: {node.var_type} {node.name}")
        self.generic_visit(node)

    def visit_FunctionDeclaration(self, node: FunctionDeclaration):
        params = ", ".join(str(p) for p in node.parameters)
        self._emit(f"FunctionDeclaration: {node.return_type} {node.name}({params})")
        self.generic_visit(node)

    def visit_IfStatement(self, node: IfStatement):
        self._emit("IfStatement")
        self.indent_level += 1
        self._section("Condition", node.condition)
        self._section("ThenBlock", node.then_branch)
        self._section("ElseBlock", node.else_branch)
        self.indent_level -= 1

    def visit_ForStatement(self, node: ForStatement):
        self._emit("ForStatement")
        self.indent_level += 1
        self._section("Initializer", node.initializer)
        self._section("Condition", node.condition)
        self._section("Update", node.update)
        self._section("Body", node.body)
        self.indent_level -= 1

    def visit_Literal(self, node: Literal):
        self._emit(f"LiteralExpression: {node.value}")

    def visit_Identifier(self, node: Identifier):
        self._emit(f"IdentifierExpression: {node.value}")

    def visit_BinaryOperator(self, node: BinaryOperator):
        self._emit(f"BinaryOperator: {node.value}")
        self.generic_visit(node)

    def visit_UnaryOperator(self, node: UnaryOperator):
        self._emit(f"UnaryOperator: {node.value}")
        self.indent_level += 1
        self._section("Operand", node.operand)
        self.indent_level -= 1

    def visit_FunctionCall(self, node: FunctionCall):
        self._emit(f"FunctionCall: {node.name}")
        self.generic_visit(node)
