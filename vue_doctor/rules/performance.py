"""Rendering-cost rules."""

from __future__ import annotations

import re

from vue_doctor.diagnostic import PERFORMANCE
from vue_doctor.rules.base import PatternRule, PredicateRule, RuleMatch

GIANT_COMPONENT_MAX_LINES = 300

V_FOR_METHOD_CALL_RE = re.compile(r'v-for\s*=\s*"[^"]*\w+\([^)]*\)')


def check_giant_component(content: str, script: str, template: str) -> list[RuleMatch]:
    _ = (script, template)
    line_count = len(content.split("\n"))
    if line_count <= GIANT_COMPONENT_MAX_LINES:
        return []
    return [
        RuleMatch(
            line=1,
            message=(
                f"Component has {line_count} lines — consider splitting into smaller components"
            ),
        )
    ]


RULES = (
    PredicateRule(
        rule_id="perf-giant-component",
        severity="warning",
        category=PERFORMANCE,
        predicate=check_giant_component,
        line_base="file",
        message="Giant component with too many lines",
        help=(
            f"Split components larger than {GIANT_COMPONENT_MAX_LINES} lines into "
            "smaller, focused sub-components"
        ),
    ),
    PatternRule(
        rule_id="perf-v-for-method-call",
        severity="warning",
        category=PERFORMANCE,
        template_pattern=V_FOR_METHOD_CALL_RE,
        message="Method call inside v-for — this runs on every re-render",
        help="Use a computed property instead of calling a method inside v-for",
    ),
)
