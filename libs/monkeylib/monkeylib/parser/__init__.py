"""Monkey parser subpackage (Layer 1 -- depends on diagnostics)."""

from monkeylib.parser.ast_nodes import (
    ArrayLiteral,
    BlockNode,
    BooleanLiteral,
    CallExpr,
    ExprNode,
    ExprStmtNode,
    FunctionLiteral,
    Identifier,
    IfExpr,
    IndexExpr,
    InfixExpr,
    IntegerLiteral,
    LetStmtNode,
    Node,
    PrefixExpr,
    ProgramNode,
    ReturnStmtNode,
    StmtNode,
    StringLiteral,
    render,
)
from monkeylib.parser.errors import ParseError
from monkeylib.parser.lexer import Lexer
from monkeylib.parser.parser import (
    MAX_NESTING_DEPTH,
    PRECEDENCES,
    Parser,
    Precedence,
    parse,
    parse_strict,
)
from monkeylib.parser.tokens import KEYWORDS, Token, TokenKind, lookup_identifier

__all__ = [
    "TokenKind",
    "Token",
    "KEYWORDS",
    "lookup_identifier",
    "Lexer",
    "Node",
    "ExprNode",
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
    "LetStmtNode",
    "ReturnStmtNode",
    "ExprStmtNode",
    "BlockNode",
    "StmtNode",
    "ProgramNode",
    "render",
    "Precedence",
    "PRECEDENCES",
    "MAX_NESTING_DEPTH",
    "Parser",
    "parse",
    "parse_strict",
    "ParseError",
]
