"""
Diagnostics — Findings of a validation pass

Diagnostics are plain values with character-offset ranges. They belong to
the pass that produced them; a new pass supersedes them wholesale.

Taxonomy:
- structural: unmatched or mismatched brackets
- declaration: duplicate, reserved-keyword or pointer declarations
- function: duplicate function signatures
"""

from dataclasses import dataclass, asdict
from enum import Enum


class Severity(Enum):
    """Diagnostic severity."""
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(Enum):
    """Which check produced a diagnostic."""
    STRUCTURAL = "structural"
    DECLARATION = "declaration"
    FUNCTION = "function"


@dataclass(frozen=True)
class Diagnostic:
    """A finding anchored at the half-open offset range [start, end)."""
    severity: Severity
    start: int
    end: int
    message: str
    kind: DiagnosticKind
    source: str = "ronscript"

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["kind"] = self.kind.value
        return data


def error(start: int, end: int, message: str, kind: DiagnosticKind, source: str = "ronscript") -> Diagnostic:
    """Build an error diagnostic."""
    return Diagnostic(Severity.ERROR, start, end, message, kind, source)


def warning(start: int, end: int, message: str, kind: DiagnosticKind, source: str = "ronscript") -> Diagnostic:
    """Build a warning diagnostic."""
    return Diagnostic(Severity.WARNING, start, end, message, kind, source)
