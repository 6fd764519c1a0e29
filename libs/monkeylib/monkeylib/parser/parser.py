"""Pratt (precedence-climbing) parser for Monkey source code.

Handles:
- ``let NAME = expr;`` and ``return expr;``
- expression statements, with an optional trailing ``;``
- prefix ``!`` / ``-``, infix ``+ - * / < > == !=``
- grouping ``( ... )``, ``if (...) { ... } else { ... }``
- function literals, calls, array literals and indexing

The parser reads the lexer's tokens exactly once with one token of
lookahead.  It never raises on malformed input: each local failure records
a diagnostic and yields ``None`` in place of the node it could not build.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import TypeVar

from monkeylib.diagnostics.collector import DiagnosticCollector
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
    PrefixExpr,
    ProgramNode,
    ReturnStmtNode,
    StmtNode,
    StringLiteral,
)
from monkeylib.parser.errors import (
    ParseError,
    invalid_integer,
    nesting_too_deep,
    no_prefix_parser,
    unexpected_token,
)
from monkeylib.parser.lexer import Lexer
from monkeylib.parser.tokens import TokenKind

T = TypeVar("T")

PrefixParseFn = Callable[[], ExprNode | None]
InfixParseFn = Callable[[ExprNode | None], ExprNode | None]

_INT64_MAX = 2**63 - 1

# One level can cost up to six frames (if -> block -> statement ->
# expression); depth times that must stay under the default recursion limit.
MAX_NESTING_DEPTH = 100


class Precedence(IntEnum):
    """Binding power of operators, weakest first."""

    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -x or !x
    CALL = 7  # f(x), a[i]


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.CALL,
}


class Parser:
    """Precedence-climbing parser over a single :class:`Lexer`.

    A parser is built for one lexer, produces one program via
    :meth:`parse_program`, and is then discarded.
    """

    def __init__(
        self,
        lexer: Lexer,
        diagnostics: DiagnosticCollector | None = None,
    ) -> None:
        self._lexer = lexer
        self._diag = diagnostics if diagnostics is not None else DiagnosticCollector()
        self._depth = 0

        self._prefix_fns: dict[TokenKind, PrefixParseFn] = {}
        self._infix_fns: dict[TokenKind, InfixParseFn] = {}

        self._register_prefix(TokenKind.IDENT, self._parse_identifier)
        self._register_prefix(TokenKind.INT, self._parse_integer_literal)
        self._register_prefix(TokenKind.STRING, self._parse_string_literal)
        self._register_prefix(TokenKind.TRUE, self._parse_boolean)
        self._register_prefix(TokenKind.FALSE, self._parse_boolean)
        self._register_prefix(TokenKind.BANG, self._parse_prefix_expression)
        self._register_prefix(TokenKind.MINUS, self._parse_prefix_expression)
        self._register_prefix(TokenKind.LPAREN, self._parse_grouped_expression)
        self._register_prefix(TokenKind.IF, self._parse_if_expression)
        self._register_prefix(TokenKind.FUNCTION, self._parse_function_literal)
        self._register_prefix(TokenKind.LBRACKET, self._parse_array_literal)

        for kind in (
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.SLASH,
            TokenKind.ASTERISK,
            TokenKind.EQ,
            TokenKind.NOT_EQ,
            TokenKind.LT,
            TokenKind.GT,
        ):
            self._register_infix(kind, self._parse_infix_expression)
        self._register_infix(TokenKind.LPAREN, self._parse_call_expression)
        self._register_infix(TokenKind.LBRACKET, self._parse_index_expression)

        # Prime current and next.
        self._cur = lexer.next_token()
        self._next = lexer.next_token()

    def _register_prefix(self, kind: TokenKind, fn: PrefixParseFn) -> None:
        self._prefix_fns[kind] = fn

    def _register_infix(self, kind: TokenKind, fn: InfixParseFn) -> None:
        self._infix_fns[kind] = fn

    # ------------------------------------------------------------------
    # Public state
    # ------------------------------------------------------------------

    @property
    def diagnostics(self) -> DiagnosticCollector:
        return self._diag

    @property
    def errors(self) -> list[str]:
        """Diagnostic messages recorded so far, in order."""
        return self._diag.messages()

    def prefix_kinds(self) -> frozenset[TokenKind]:
        """Token kinds that can start an expression."""
        return frozenset(self._prefix_fns)

    def infix_kinds(self) -> frozenset[TokenKind]:
        """Token kinds that can continue an expression."""
        return frozenset(self._infix_fns)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        """Shift next into current and pull a fresh token from the lexer."""
        self._cur = self._next
        self._next = self._lexer.next_token()

    def _cur_is(self, kind: TokenKind) -> bool:
        return self._cur.kind == kind

    def _next_is(self, kind: TokenKind) -> bool:
        return self._next.kind == kind

    def _expect_next(self, kind: TokenKind) -> bool:
        """Advance if the next token is *kind*; otherwise report it and stay put."""
        if self._next_is(kind):
            self._advance()
            return True
        self._diag.error(unexpected_token(kind, self._next), self._next.location)
        return False

    def _next_precedence(self) -> Precedence:
        return PRECEDENCES.get(self._next.kind, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self._cur.kind, Precedence.LOWEST)

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse_program(self) -> ProgramNode:
        """Parse the whole token stream into a program."""
        stmts: list[StmtNode] = []
        while not self._cur_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                stmts.append(stmt)
            self._advance()
        return ProgramNode(statements=tuple(stmts))

    def parse_statement(self) -> StmtNode | None:
        """Parse one statement starting at the current token."""
        if self._cur_is(TokenKind.LET):
            return self._parse_let_statement()
        if self._cur_is(TokenKind.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStmtNode | None:
        """Parse ``let NAME = expr;``."""
        let_tok = self._cur
        if not self._expect_next(TokenKind.IDENT):
            return None
        name = Identifier(token=self._cur, name=self._cur.lexeme)
        if not self._expect_next(TokenKind.ASSIGN):
            return None

        self._advance()
        value = self.parse_expression(Precedence.LOWEST)

        if self._next_is(TokenKind.SEMICOLON):
            self._advance()
        return LetStmtNode(token=let_tok, name=name, value=value)

    def _parse_return_statement(self) -> ReturnStmtNode:
        """Parse ``return expr;``, skipping anything left before the ``;``."""
        return_tok = self._cur
        self._advance()
        value = self.parse_expression(Precedence.LOWEST)

        while not self._cur_is(TokenKind.SEMICOLON) and not self._cur_is(TokenKind.EOF):
            self._advance()
        return ReturnStmtNode(token=return_tok, value=value)

    def _parse_expression_statement(self) -> ExprStmtNode:
        tok = self._cur
        expression = self.parse_expression(Precedence.LOWEST)

        if self._next_is(TokenKind.SEMICOLON):
            self._advance()
        return ExprStmtNode(token=tok, expression=expression)

    def _parse_block(self) -> BlockNode:
        """Parse statements after ``{`` up to the matching ``}`` or EOF."""
        brace_tok = self._cur
        stmts: list[StmtNode] = []
        self._advance()
        while not self._cur_is(TokenKind.RBRACE) and not self._cur_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                stmts.append(stmt)
            self._advance()
        return BlockNode(token=brace_tok, statements=tuple(stmts))

    # ------------------------------------------------------------------
    # Expression parsing (precedence climbing)
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence) -> ExprNode | None:
        """Parse an expression whose operators all bind tighter than *precedence*.

        Nesting deeper than MAX_NESTING_DEPTH records a diagnostic and yields
        an absent node.
        """
        if self._depth >= MAX_NESTING_DEPTH:
            self._diag.error(nesting_too_deep(MAX_NESTING_DEPTH), self._cur.location)
            return None
        self._depth += 1
        try:
            return self._parse_expression(precedence)
        finally:
            self._depth -= 1

    def _parse_expression(self, precedence: Precedence) -> ExprNode | None:
        prefix = self._prefix_fns.get(self._cur.kind)
        if prefix is None:
            self._diag.error(no_prefix_parser(self._cur.kind), self._cur.location)
            return None
        left = prefix()

        while not self._next_is(TokenKind.SEMICOLON) and precedence < self._next_precedence():
            infix = self._infix_fns.get(self._next.kind)
            if infix is None:
                return left
            self._advance()
            left = infix(left)
        return left

    # ------------------------------------------------------------------
    # Prefix handlers
    # ------------------------------------------------------------------

    def _parse_identifier(self) -> ExprNode:
        return Identifier(token=self._cur, name=self._cur.lexeme)

    def _parse_integer_literal(self) -> ExprNode | None:
        tok = self._cur
        try:
            value = int(tok.lexeme)
        except ValueError:
            value = None
        if value is None or value > _INT64_MAX:
            self._diag.error(invalid_integer(tok.lexeme), tok.location)
            return None
        return IntegerLiteral(token=tok, value=value)

    def _parse_string_literal(self) -> ExprNode:
        return StringLiteral(token=self._cur, value=self._cur.lexeme)

    def _parse_boolean(self) -> ExprNode:
        return BooleanLiteral(token=self._cur, value=self._cur_is(TokenKind.TRUE))

    def _parse_prefix_expression(self) -> ExprNode:
        tok = self._cur
        self._advance()
        operand = self.parse_expression(Precedence.PREFIX)
        return PrefixExpr(token=tok, operator=tok.lexeme, operand=operand)

    def _parse_grouped_expression(self) -> ExprNode | None:
        self._advance()
        expr = self.parse_expression(Precedence.LOWEST)
        if not self._expect_next(TokenKind.RPAREN):
            return None
        return expr

    def _parse_if_expression(self) -> ExprNode | None:
        """Parse ``if (cond) { ... }`` with an optional ``else { ... }``."""
        if_tok = self._cur
        if not self._expect_next(TokenKind.LPAREN):
            return None
        self._advance()
        condition = self.parse_expression(Precedence.LOWEST)
        if not self._expect_next(TokenKind.RPAREN):
            return None
        if not self._expect_next(TokenKind.LBRACE):
            return None
        consequence = self._parse_block()

        alternative: BlockNode | None = None
        if self._next_is(TokenKind.ELSE):
            self._advance()
            if not self._expect_next(TokenKind.LBRACE):
                return None
            alternative = self._parse_block()

        return IfExpr(
            token=if_tok,
            condition=condition,
            consequence=consequence,
            alternative=alternative,
        )

    def _parse_function_literal(self) -> ExprNode | None:
        """Parse ``function(a, b) { ... }``."""
        fn_tok = self._cur
        if not self._expect_next(TokenKind.LPAREN):
            return None
        params = self._parse_list(TokenKind.RPAREN, self._parse_parameter)
        if params is None or None in params:
            return None
        if not self._expect_next(TokenKind.LBRACE):
            return None
        body = self._parse_block()
        return FunctionLiteral(token=fn_tok, parameters=params, body=body)

    def _parse_parameter(self) -> Identifier | None:
        tok = self._cur
        if tok.kind != TokenKind.IDENT:
            self._diag.error(unexpected_token(TokenKind.IDENT, tok), tok.location)
            return None
        return Identifier(token=tok, name=tok.lexeme)

    def _parse_array_literal(self) -> ExprNode | None:
        tok = self._cur
        elements = self._parse_list(TokenKind.RBRACKET, self._parse_element)
        if elements is None:
            return None
        return ArrayLiteral(token=tok, elements=elements)

    # ------------------------------------------------------------------
    # Infix handlers
    # ------------------------------------------------------------------

    def _parse_infix_expression(self, left: ExprNode | None) -> ExprNode:
        tok = self._cur
        precedence = self._cur_precedence()
        self._advance()
        right = self.parse_expression(precedence)
        return InfixExpr(token=tok, operator=tok.lexeme, left=left, right=right)

    def _parse_call_expression(self, callee: ExprNode | None) -> ExprNode | None:
        tok = self._cur
        arguments = self._parse_list(TokenKind.RPAREN, self._parse_element)
        if arguments is None:
            return None
        return CallExpr(token=tok, callee=callee, arguments=arguments)

    def _parse_index_expression(self, collection: ExprNode | None) -> ExprNode | None:
        tok = self._cur
        self._advance()
        index = self.parse_expression(Precedence.LOWEST)
        if not self._expect_next(TokenKind.RBRACKET):
            return None
        return IndexExpr(token=tok, collection=collection, index=index)

    # ------------------------------------------------------------------
    # Comma-separated lists
    # ------------------------------------------------------------------

    def _parse_element(self) -> ExprNode | None:
        return self.parse_expression(Precedence.LOWEST)

    def _parse_list(
        self,
        end: TokenKind,
        parse_element: Callable[[], T],
    ) -> tuple[T, ...] | None:
        """Parse ``elem, elem, ... <end>``. The current token is the opener.

        Returns ``None`` (after reporting) if the closing token is missing.
        """
        if self._next_is(end):
            self._advance()
            return ()

        self._advance()
        items = [parse_element()]
        while self._next_is(TokenKind.COMMA):
            self._advance()
            self._advance()
            items.append(parse_element())

        if not self._expect_next(end):
            return None
        return tuple(items)


# ------------------------------------------------------------------
# Convenience functions
# ------------------------------------------------------------------


def parse(source: str, filename: str = "<string>") -> tuple[ProgramNode, DiagnosticCollector]:
    """Parse Monkey source code.

    Returns:
        A ``(program_ast, diagnostics)`` tuple.  The program is always
        returned; check ``diagnostics.has_errors()`` before using it.
    """
    diag = DiagnosticCollector()
    parser = Parser(Lexer(source, filename), diag)
    program = parser.parse_program()
    return program, diag


def parse_strict(source: str, filename: str = "<string>") -> ProgramNode:
    """Parse Monkey source code, raising :class:`ParseError` on any error."""
    program, diag = parse(source, filename)
    if diag.has_errors():
        errors = tuple(d for d in diag.get_all() if d.is_error())
        raise ParseError(
            f"{len(errors)} error(s) while parsing {filename}:\n{diag.format_all()}",
            errors[0].location,
            errors,
        )
    return program
