"""Health score calculation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from vue_doctor.diagnostic import Diagnostic

ScoreLabel = Literal["Great", "Needs work", "Critical"]

SEVERITY_WEIGHTS = {
    "error": 2.0,
    "warning": 0.5,
}

SCORE_THRESHOLDS = {
    "great": 75,
    "needs_work": 50,
}


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Bounded health score and its label."""

    score: int
    label: ScoreLabel

    def to_dict(self) -> dict[str, object]:
        return {"score": self.score, "label": self.label}


def calculate_score(diagnostics: list[Diagnostic]) -> ScoreResult:
    """Score 0-100: errors deduct 2 points each, warnings 0.5."""
    error_count = sum(1 for item in diagnostics if item.severity == "error")
    warning_count = sum(1 for item in diagnostics if item.severity == "warning")
    deduction = (
        error_count * SEVERITY_WEIGHTS["error"] + warning_count * SEVERITY_WEIGHTS["warning"]
    )
    score = _clamp(_round_half_up(100 - deduction))
    return ScoreResult(score=score, label=score_label(score))


def score_label(score: int) -> ScoreLabel:
    if score >= SCORE_THRESHOLDS["great"]:
        return "Great"
    if score >= SCORE_THRESHOLDS["needs_work"]:
        return "Needs work"
    return "Critical"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: int, lower: int = 0, upper: int = 100) -> int:
    return max(lower, min(upper, value))
