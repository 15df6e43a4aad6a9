"""Reactivity-loss rules."""

from __future__ import annotations

import re

from vue_doctor.diagnostic import REACTIVITY
from vue_doctor.rules.base import PatternRule, PredicateRule, RuleMatch

DESTRUCTURE_PROPS_RE = re.compile(r"(?:const|let|var)\s*\{[^}]+\}\s*=\s*(?:defineProps|props)\b")
REACTIVE_DECL_RE = re.compile(r"(?:const|let|var)\s+(\w+)\s*=\s*reactive\(")
REF_DECL_RE = re.compile(r"(?:const|let|var)\s+(\w+)\s*=\s*ref\s*[<(]")

DECLARATION_KEYWORDS = ("const ", "let ", "var ")

# Wrappers that evaluate the ref lazily; operators inside them are fine.
DEFERRED_WRAPPERS = ("watch(", "computed(", "return")


def collect_reactive_names(lines: list[str]) -> set[str]:
    """Names bound to ``reactive(...)`` anywhere in the script."""
    names: set[str] = set()
    for line in lines:
        match = REACTIVE_DECL_RE.search(line)
        if match:
            names.add(match.group(1))
    return names


def find_reactive_reassignments(lines: list[str], names: set[str]) -> list[RuleMatch]:
    patterns = {name: re.compile(rf"^\s*{re.escape(name)}\s*=(?!=)\s*(?!.*\.)") for name in names}
    matches: list[RuleMatch] = []
    for index, line in enumerate(lines):
        if "reactive(" in line or any(keyword in line for keyword in DECLARATION_KEYWORDS):
            continue
        for name in sorted(names):
            if patterns[name].search(line):
                matches.append(RuleMatch(line=index + 1))
    return matches


def check_reactive_reassign(content: str, script: str, template: str) -> list[RuleMatch]:
    _ = (content, template)
    lines = script.split("\n")
    return find_reactive_reassignments(lines, collect_reactive_names(lines))


def collect_ref_names(lines: list[str]) -> set[str]:
    """Names bound to ``ref(...)`` or ``ref<T>(...)``."""
    names: set[str] = set()
    for line in lines:
        match = REF_DECL_RE.search(line)
        if match:
            names.add(match.group(1))
    return names


def find_ref_operator_use(lines: list[str], names: set[str]) -> list[RuleMatch]:
    matches: list[RuleMatch] = []
    for index, line in enumerate(lines):
        stripped = line.strip()
        if "= ref" in line or stripped.startswith("//") or stripped.startswith("*"):
            continue
        if any(wrapper in line for wrapper in DEFERRED_WRAPPERS):
            continue
        for name in sorted(names):
            escaped = re.escape(name)
            if re.search(rf"\b{escaped}\.value\b", line):
                continue
            if not re.search(rf"\b{escaped}\b(?!\.value)(?!\w)", line):
                continue
            if re.search(rf"\b{escaped}\b\s*(?:[=!<>]=|[+\-*/]=|\+\+|--)", line):
                matches.append(
                    RuleMatch(
                        line=index + 1,
                        message=(
                            f'Ref "{name}" used without .value in script — this '
                            "compares/assigns the Ref object, not its value"
                        ),
                    )
                )
    return matches


def check_ref_no_value(content: str, script: str, template: str) -> list[RuleMatch]:
    _ = (content, template)
    lines = script.split("\n")
    return find_ref_operator_use(lines, collect_ref_names(lines))


RULES = (
    PatternRule(
        rule_id="reactivity-destructure-props",
        severity="error",
        category=REACTIVITY,
        script_pattern=DESTRUCTURE_PROPS_RE,
        message="Destructuring props loses reactivity in Vue 3",
        help="Use `toRefs(props)` or access `props.xxx` directly instead of destructuring",
    ),
    PredicateRule(
        rule_id="reactivity-reactive-reassign",
        severity="error",
        category=REACTIVITY,
        predicate=check_reactive_reassign,
        line_base="script",
        message="Reassigning a reactive() variable replaces the proxy and breaks reactivity",
        help="Use Object.assign(state, newData) or replace individual properties instead",
    ),
    PredicateRule(
        rule_id="reactivity-ref-no-value",
        severity="warning",
        category=REACTIVITY,
        predicate=check_ref_no_value,
        line_base="script",
        message="Ref used without .value in script block",
        help=(
            "Access ref values with .value in <script> "
            "(auto-unwrapping only works in <template>)"
        ),
    ),
)
