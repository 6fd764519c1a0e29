"""Token definitions for the Monkey lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from monkeylib.diagnostics.location import SourceLocation


class TokenKind(Enum):
    """All token types recognized by the Monkey lexer."""

    # Special
    ILLEGAL = auto()
    EOF = auto()

    # Identifiers and literals
    IDENT = auto()
    INT = auto()
    STRING = auto()

    # Operators
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    BANG = auto()  # !
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    LT = auto()  # <
    GT = auto()  # >
    EQ = auto()  # ==
    NOT_EQ = auto()  # !=

    # Delimiters
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]

    # Keywords
    FUNCTION = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()


# Keyword string -> TokenKind mapping.
# Identifiers are checked against this table during lexing.
KEYWORDS: dict[str, TokenKind] = {
    "function": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}


def lookup_identifier(text: str) -> TokenKind:
    """Return the keyword kind for *text*, or ``IDENT`` if it is not reserved."""
    return KEYWORDS.get(text, TokenKind.IDENT)


@dataclass(frozen=True)
class Token:
    """A single token produced by the Monkey lexer."""

    kind: TokenKind
    lexeme: str
    location: SourceLocation | None = None
