"""Per-parse diagnostic accumulator."""

from __future__ import annotations

from typing import List, Tuple

from .models import Diagnostic, Label, Severity, Span


class DiagnosticContext:
    """Collects diagnostics for one source file during one parse.

    The context is append-only. Create a new one per file; it is never
    shared between parses.
    """

    def __init__(self, file_id: int = 0):
        self.file_id = file_id
        self._diagnostics: List[Diagnostic] = []

    def push(self, severity: Severity, message: str, span: Span, note: str = "") -> Diagnostic:
        diagnostic = Diagnostic(
            severity=severity,
            message=message,
            labels=[Label(file_id=self.file_id, span=span, note=note)],
        )
        self._diagnostics.append(diagnostic)
        return diagnostic

    def error(self, message: str, span: Span, note: str = "") -> Diagnostic:
        return self.push(Severity.ERROR, message, span, note)

    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def has_errors(self) -> bool:
        return any(d.severity in (Severity.BUG, Severity.ERROR) for d in self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
