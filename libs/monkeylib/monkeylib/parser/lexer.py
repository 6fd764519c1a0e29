"""Lexer (tokenizer) for Monkey source code."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from monkeylib.diagnostics.location import SourceLocation
from monkeylib.parser.tokens import Token, TokenKind, lookup_identifier

# Sentinel for "past the end of the source".
_NUL = ""

_WHITESPACE = frozenset(" \t\n\r")


def _is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Forward-only tokenizer over a single source text.

    Each call to :meth:`next_token` produces exactly one token and moves the
    cursor forward by at least one character, so unrecognized input can never
    stall the caller.  The lexer reports nothing itself: bad characters come
    out as ``ILLEGAL`` tokens for the parser to react to.  Once the input is
    exhausted every further call returns the same ``EOF`` token.

    The source is a ``str``, so a non-ASCII character is one ``ILLEGAL``
    token rather than one per encoded byte.
    """

    # Single-character tokens that need no lookahead.
    _SINGLE_CHAR: dict[str, TokenKind] = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.ASTERISK,
        "/": TokenKind.SLASH,
        "<": TokenKind.LT,
        ">": TokenKind.GT,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMICOLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
    }

    # First character -> (two-character kind, fallback single-character kind).
    _TWO_CHAR: dict[str, tuple[TokenKind, TokenKind]] = {
        "=": (TokenKind.EQ, TokenKind.ASSIGN),
        "!": (TokenKind.NOT_EQ, TokenKind.BANG),
    }

    def __init__(self, source: str, filename: str = "<string>") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0  # index of self._ch
        self._read_pos = 0  # index of the next character to read
        self._ch = _NUL
        self._line = 1
        self._col = 0
        self._eof: Token | None = None
        self._read_char()

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------

    def _read_char(self) -> None:
        """Move the cursor one character forward, updating line/col."""
        if self._ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        if self._read_pos >= len(self._source):
            self._ch = _NUL
        else:
            self._ch = self._source[self._read_pos]
        self._pos = self._read_pos
        self._read_pos += 1

    def _peek_char(self) -> str:
        """Return the character after the current one, or '' at EOF."""
        if self._read_pos < len(self._source):
            return self._source[self._read_pos]
        return _NUL

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _loc(self, line: int, col: int) -> SourceLocation:
        return SourceLocation(file=self._filename, line=line, column=col)

    # ------------------------------------------------------------------
    # Scanning helpers
    # ------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._ch in _WHITESPACE:
            self._read_char()

    def _read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume the maximal run of characters matching *predicate*."""
        begin = self._pos
        while not self._at_end() and predicate(self._ch):
            self._read_char()
        return self._source[begin : self._pos]

    def _read_string(self) -> str:
        """Consume a string body. The cursor is on the opening '"'.

        Stops on the closing quote (left under the cursor) or at end of
        input; an unterminated string simply runs to the end.
        """
        self._read_char()
        begin = self._pos
        while not self._at_end() and self._ch != '"':
            self._read_char()
        return self._source[begin : self._pos]

    # ------------------------------------------------------------------
    # Main entry points
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token from the source."""
        self._skip_whitespace()

        if self._at_end():
            if self._eof is None:
                self._eof = Token(TokenKind.EOF, "", self._loc(self._line, self._col))
            return self._eof

        line, col = self._line, self._col
        ch = self._ch

        # Identifiers, keywords and integers leave the cursor on the first
        # character after the run, so they return without a final advance.
        if _is_letter(ch):
            text = self._read_while(_is_letter)
            return Token(lookup_identifier(text), text, self._loc(line, col))

        if _is_digit(ch):
            text = self._read_while(_is_digit)
            return Token(TokenKind.INT, text, self._loc(line, col))

        if ch in self._TWO_CHAR:
            double, single = self._TWO_CHAR[ch]
            if self._peek_char() == "=":
                self._read_char()
                tok = Token(double, ch + "=", self._loc(line, col))
            else:
                tok = Token(single, ch, self._loc(line, col))
        elif ch in self._SINGLE_CHAR:
            tok = Token(self._SINGLE_CHAR[ch], ch, self._loc(line, col))
        elif ch == '"':
            tok = Token(TokenKind.STRING, self._read_string(), self._loc(line, col))
        else:
            tok = Token(TokenKind.ILLEGAL, ch, self._loc(line, col))

        self._read_char()
        return tok

    def tokenize(self) -> list[Token]:
        """Drain the lexer. Returns every token up to and including EOF."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.kind == TokenKind.EOF:
                return tokens

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens until (but excluding) EOF."""
        while True:
            tok = self.next_token()
            if tok.kind == TokenKind.EOF:
                return
            yield tok
