"""Uniform finding record shared by every analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

Severity = Literal["error", "warning"]

REACTIVITY = "Reactivity"
PERFORMANCE = "Performance"
SECURITY = "Security"
CORRECTNESS = "Correctness"
ARCHITECTURE = "Architecture"
ACCESSIBILITY = "Accessibility"
DEAD_CODE = "Dead Code"
BEST_PRACTICES = "Best Practices"
NUXT = "Nuxt"
OTHER = "Other"

KNOWN_CATEGORIES = (
    REACTIVITY,
    PERFORMANCE,
    SECURITY,
    CORRECTNESS,
    ARCHITECTURE,
    ACCESSIBILITY,
    DEAD_CODE,
    BEST_PRACTICES,
    NUXT,
    OTHER,
)

_ERROR_ALIASES = {"error", "fatal", "2"}


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single issue reported by an analyzer."""

    file_path: str
    plugin: str
    rule: str
    severity: Severity
    message: str
    help: str
    line: int
    column: int
    category: str

    @property
    def key(self) -> tuple[str, int, str]:
        """Identity used for cross-analyzer deduplication."""
        return (self.file_path, self.line, self.rule)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "plugin": self.plugin,
            "rule": self.rule,
            "severity": self.severity,
            "message": self.message,
            "help": self.help,
            "line": self.line,
            "column": self.column,
            "category": self.category,
        }


def coerce_severity(value: object) -> Severity:
    """Map an analyzer-specific severity onto error/warning."""
    if str(value).strip().lower() in _ERROR_ALIASES:
        return "error"
    return "warning"
