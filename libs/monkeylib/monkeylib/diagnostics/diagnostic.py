"""A single message produced while tokenizing or parsing."""

from __future__ import annotations

from dataclasses import dataclass

from monkeylib.diagnostics.location import SourceLocation
from monkeylib.diagnostics.severity import DiagnosticSeverity


@dataclass(frozen=True)
class Diagnostic:
    """A diagnostic message with an optional source position."""

    severity: DiagnosticSeverity
    message: str
    location: SourceLocation | None = None
    notes: tuple[str, ...] = ()

    def is_error(self) -> bool:
        return self.severity is DiagnosticSeverity.ERROR

    def __str__(self) -> str:
        loc = f"{self.location}: " if self.location else ""
        text = f"{loc}{self.severity}: {self.message}"
        for note in self.notes:
            text += f"\n  note: {note}"
        return text
