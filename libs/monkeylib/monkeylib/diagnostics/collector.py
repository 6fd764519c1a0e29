"""Ordered accumulation of diagnostics for one parse."""

from __future__ import annotations

from monkeylib.diagnostics.diagnostic import Diagnostic
from monkeylib.diagnostics.location import SourceLocation
from monkeylib.diagnostics.severity import DiagnosticSeverity


class DiagnosticCollector:
    """Accumulates diagnostics in the order they are reported.

    The parser never raises on malformed input; every local failure lands
    here instead, and the caller decides what to do with the result.
    """

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def _add(
        self,
        severity: DiagnosticSeverity,
        message: str,
        location: SourceLocation | None,
        notes: tuple[str, ...],
    ) -> None:
        self._diagnostics.append(Diagnostic(severity, message, location, notes))

    def error(
        self,
        message: str,
        location: SourceLocation | None = None,
        *,
        notes: tuple[str, ...] = (),
    ) -> None:
        """Record an error diagnostic."""
        self._add(DiagnosticSeverity.ERROR, message, location, notes)

    def warning(
        self,
        message: str,
        location: SourceLocation | None = None,
        *,
        notes: tuple[str, ...] = (),
    ) -> None:
        """Record a warning diagnostic."""
        self._add(DiagnosticSeverity.WARNING, message, location, notes)

    def info(
        self,
        message: str,
        location: SourceLocation | None = None,
        *,
        notes: tuple[str, ...] = (),
    ) -> None:
        """Record an informational diagnostic."""
        self._add(DiagnosticSeverity.INFO, message, location, notes)

    def has_errors(self) -> bool:
        """Return True if any error diagnostics have been recorded."""
        return any(d.is_error() for d in self._diagnostics)

    def get_all(self) -> list[Diagnostic]:
        """Return a copy of all collected diagnostics."""
        return list(self._diagnostics)

    def messages(self) -> list[str]:
        """Return the bare message text of every diagnostic, in order."""
        return [d.message for d in self._diagnostics]

    def format_all(self) -> str:
        """Format all diagnostics as a newline-separated string."""
        return "\n".join(str(d) for d in self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
