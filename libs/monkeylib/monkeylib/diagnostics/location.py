"""Source positions attached to tokens and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """A position in Monkey source text."""

    file: str
    line: int  # 1-indexed
    column: int  # 1-indexed
    end_line: int | None = None
    end_column: int | None = None

    def __str__(self) -> str:
        if self.end_line is None or self.end_column is None:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}:{self.column}-{self.end_line}:{self.end_column}"
