"""Pinia store usage rules."""

from __future__ import annotations

import re

from vue_doctor.diagnostic import BEST_PRACTICES, REACTIVITY
from vue_doctor.rules.base import PatternRule, PredicateRule, RuleMatch

STORE_DESTRUCTURE_RE = re.compile(r"(?:const|let|var)\s*\{[^}]+\}\s*=\s*use\w+Store\s*\(\)")
STORE_DECL_RE = re.compile(r"(?:const|let|var)\s+(\w+)\s*=\s*use\w+Store\s*\(\)")


def collect_store_names(lines: list[str]) -> set[str]:
    names: set[str] = set()
    for line in lines:
        match = STORE_DECL_RE.search(line)
        if match:
            names.add(match.group(1))
    return names


def find_state_mutations(lines: list[str], names: set[str]) -> list[RuleMatch]:
    """Flag ``store.member = ...`` writes; ``$``-prefixed store API members never match."""
    patterns = {name: re.compile(rf"\b{re.escape(name)}\.\w+\s*=(?!=)") for name in names}
    matches: list[RuleMatch] = []
    for index, line in enumerate(lines):
        for name in sorted(names):
            if patterns[name].search(line):
                matches.append(RuleMatch(line=index + 1))
    return matches


def check_direct_state_mutation(content: str, script: str, template: str) -> list[RuleMatch]:
    _ = (content, template)
    lines = script.split("\n")
    return find_state_mutations(lines, collect_store_names(lines))


RULES = (
    PatternRule(
        rule_id="pinia-no-store-to-refs",
        severity="warning",
        category=REACTIVITY,
        script_pattern=STORE_DESTRUCTURE_RE,
        message="Destructuring store without storeToRefs() loses reactivity",
        help=(
            "Use `const { count } = storeToRefs(useCounterStore())` for reactive "
            "destructuring, or destructure only actions"
        ),
    ),
    PredicateRule(
        rule_id="pinia-direct-state-mutation",
        severity="warning",
        category=BEST_PRACTICES,
        predicate=check_direct_state_mutation,
        line_base="script",
        message="Direct mutation of store state outside store actions",
        help="Use store actions or $patch() for state mutations to maintain traceability",
    ),
)
