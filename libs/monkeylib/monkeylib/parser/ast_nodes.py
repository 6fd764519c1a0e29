"""AST node types for the Monkey parser.

Every node is a frozen dataclass holding the token that introduced it; the
token is kept for diagnostics and literal text only.  Child expressions are
typed ``ExprNode | None``: ``None`` marks a child the parser could not build
and has already reported, so consumers must skip it rather than compute on it.

:func:`render` produces the canonical text form.  Infix and prefix
expressions come out fully parenthesized, which makes it the reference for
checking operator precedence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from monkeylib.parser.tokens import Token

__all__ = [
    "Node",
    "ExprNode",
    # Expression nodes
    "Identifier",
    "IntegerLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "PrefixExpr",
    "InfixExpr",
    "IfExpr",
    "FunctionLiteral",
    "CallExpr",
    "ArrayLiteral",
    "IndexExpr",
    # Statement nodes
    "LetStmtNode",
    "ReturnStmtNode",
    "ExprStmtNode",
    "BlockNode",
    "StmtNode",
    # Program node
    "ProgramNode",
    "render",
]


class Node:
    """Base type for all AST nodes."""

    token: Token

    def token_literal(self) -> str:
        """Text of the token that introduced this node."""
        return self.token.lexeme

    def __str__(self) -> str:
        return render(self)


class ExprNode(Node):
    """Base type for expression nodes. All concrete subclasses are frozen dataclasses."""


# ---------------------------------------------------------------------------
# Literal and name expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Identifier(ExprNode):
    """Identifier reference: ``x``, ``add``."""

    token: Token
    name: str


@dataclass(frozen=True)
class IntegerLiteral(ExprNode):
    """Integer literal, within the signed 64-bit range."""

    token: Token
    value: int


@dataclass(frozen=True)
class StringLiteral(ExprNode):
    """String literal; ``value`` excludes the quotes."""

    token: Token
    value: str


@dataclass(frozen=True)
class BooleanLiteral(ExprNode):
    """``true`` or ``false``."""

    token: Token
    value: bool


# ---------------------------------------------------------------------------
# Operator expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrefixExpr(ExprNode):
    """Unary operation: ``!operand`` or ``-operand``."""

    token: Token
    operator: str
    operand: ExprNode | None


@dataclass(frozen=True)
class InfixExpr(ExprNode):
    """Binary operation: left op right."""

    token: Token
    operator: str
    left: ExprNode | None
    right: ExprNode | None


# ---------------------------------------------------------------------------
# Compound expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IfExpr(ExprNode):
    """``if (condition) { ... } else { ... }``; the else branch is optional."""

    token: Token
    condition: ExprNode | None
    consequence: BlockNode
    alternative: BlockNode | None = None


@dataclass(frozen=True)
class FunctionLiteral(ExprNode):
    """``function(a, b) { ... }``."""

    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockNode


@dataclass(frozen=True)
class CallExpr(ExprNode):
    """``callee(arg, ...)``; the token is the opening parenthesis."""

    token: Token
    callee: ExprNode | None
    arguments: tuple[ExprNode | None, ...]


@dataclass(frozen=True)
class ArrayLiteral(ExprNode):
    """Array literal: ``[val, val, ...]``."""

    token: Token
    elements: tuple[ExprNode | None, ...]


@dataclass(frozen=True)
class IndexExpr(ExprNode):
    """``collection[index]``; the token is the opening bracket."""

    token: Token
    collection: ExprNode | None
    index: ExprNode | None


# ---------------------------------------------------------------------------
# Statement nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LetStmtNode(Node):
    """``let NAME = value;``."""

    token: Token
    name: Identifier
    value: ExprNode | None


@dataclass(frozen=True)
class ReturnStmtNode(Node):
    """``return value;``."""

    token: Token
    value: ExprNode | None


@dataclass(frozen=True)
class ExprStmtNode(Node):
    """An expression used as a statement, e.g. ``x + 1;``."""

    token: Token
    expression: ExprNode | None


@dataclass(frozen=True)
class BlockNode(Node):
    """``{ stmt; stmt; }``; the token is the opening brace."""

    token: Token
    statements: tuple[StmtNode, ...]


# Union of all statement types the parser can produce.
StmtNode = Union[LetStmtNode, ReturnStmtNode, ExprStmtNode, BlockNode]


# ---------------------------------------------------------------------------
# Program node
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProgramNode(Node):
    """Root of the tree: the statements of one source text, in source order."""

    statements: tuple[StmtNode, ...]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""


# ---------------------------------------------------------------------------
# Canonical rendering
# ---------------------------------------------------------------------------


_Part = Union[str, Node, None]


def _joined(nodes: tuple[Node | None, ...]) -> list[_Part]:
    parts: list[_Part] = []
    for i, n in enumerate(nodes):
        if i:
            parts.append(", ")
        parts.append(n)
    return parts


def _parts(node: Node) -> list[_Part]:
    """Split *node* into literal text and child nodes, in output order."""
    if isinstance(node, (ProgramNode, BlockNode)):
        return list(node.statements)
    if isinstance(node, LetStmtNode):
        return [f"{node.token_literal()} ", node.name, " = ", node.value, ";"]
    if isinstance(node, ReturnStmtNode):
        if node.value is None:
            return [f"{node.token_literal()};"]
        return [f"{node.token_literal()} ", node.value, ";"]
    if isinstance(node, ExprStmtNode):
        return [node.expression]
    if isinstance(node, Identifier):
        return [node.name]
    if isinstance(node, (IntegerLiteral, StringLiteral, BooleanLiteral)):
        return [node.token.lexeme]
    if isinstance(node, PrefixExpr):
        return [f"({node.operator}", node.operand, ")"]
    if isinstance(node, InfixExpr):
        return ["(", node.left, f" {node.operator} ", node.right, ")"]
    if isinstance(node, IfExpr):
        parts: list[_Part] = ["if ", node.consequence]
        if node.alternative is not None:
            parts += ["else ", node.alternative]
        return parts
    if isinstance(node, FunctionLiteral):
        return [f"{node.token_literal()}(", *_joined(node.parameters), ") ", node.body]
    if isinstance(node, CallExpr):
        return [node.callee, "(", *_joined(node.arguments), ")"]
    if isinstance(node, ArrayLiteral):
        return ["[", *_joined(node.elements), "]"]
    if isinstance(node, IndexExpr):
        return [node.collection, "[", node.index, "]"]
    raise TypeError(f"Cannot render node type: {type(node).__name__}")


def render(node: Node | None) -> str:
    """Render *node* in canonical form. An absent node renders as ``""``.

    Iterative: tree depth is not bounded by the recursion limit.
    """
    out: list[str] = []
    stack: list[_Part] = [node]
    while stack:
        item = stack.pop()
        if item is None:
            continue
        if isinstance(item, str):
            out.append(item)
        else:
            stack.extend(reversed(_parts(item)))
    return "".join(out)
