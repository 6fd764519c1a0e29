"""Parse error type and diagnostic message builders for the Monkey parser."""

from __future__ import annotations

from monkeylib.diagnostics.diagnostic import Diagnostic
from monkeylib.diagnostics.location import SourceLocation
from monkeylib.parser.tokens import Token, TokenKind


class ParseError(Exception):
    """Raised by :func:`~monkeylib.parser.parser.parse_strict` when a parse recorded errors.

    The parser itself never raises; this is for callers that want a hard
    failure instead of inspecting the diagnostics themselves.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation | None = None,
        diagnostics: tuple[Diagnostic, ...] = (),
    ) -> None:
        super().__init__(message)
        self.location = location
        self.diagnostics = diagnostics


def unexpected_token(expected: TokenKind, actual: Token) -> str:
    return f"Expected next token to be {expected.name}, got {actual.kind.name} {actual.lexeme!r}"


def invalid_integer(text: str) -> str:
    return f"Could not parse {text!r} as integer"


def no_prefix_parser(kind: TokenKind) -> str:
    return f"No prefix parse function for {kind.name} found"


def nesting_too_deep(limit: int) -> str:
    return f"Expression nesting exceeds {limit} levels"
