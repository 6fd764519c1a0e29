"""Monkey diagnostics subpackage (Layer 0, no internal dependencies)."""

from monkeylib.diagnostics.collector import DiagnosticCollector
from monkeylib.diagnostics.diagnostic import Diagnostic
from monkeylib.diagnostics.location import SourceLocation
from monkeylib.diagnostics.severity import DiagnosticSeverity

__all__ = ["SourceLocation", "DiagnosticSeverity", "Diagnostic", "DiagnosticCollector"]
