"""Nuxt 3 lifecycle rules."""

from __future__ import annotations

import re

from vue_doctor.diagnostic import NUXT
from vue_doctor.rules.base import PatternRule, PredicateRule, RuleMatch

NUXT_FRAMEWORKS = ("nuxt3",)

FETCH_IN_MOUNTED_RE = re.compile(
    r"onMounted\s*\(\s*(?:async\s*)?\(\)\s*=>\s*\{.*?(?:useFetch|useAsyncData|\$fetch)\b"
)
NAVIGATE_TO_RE = re.compile(r"navigateTo\s*\(")
RETURN_NAVIGATE_TO_RE = re.compile(r"return\s+navigateTo")


def find_setup_level_navigations(lines: list[str]) -> list[RuleMatch]:
    """Flag ``navigateTo(`` calls made while brace depth is at most 1.

    Depth is a running count of ``{`` minus ``}`` including the current
    line. Braces inside strings or template literals are counted too.
    """
    matches: list[RuleMatch] = []
    depth = 0
    for index, line in enumerate(lines):
        depth += line.count("{") - line.count("}")
        if depth > 1:
            continue
        if NAVIGATE_TO_RE.search(line) and not RETURN_NAVIGATE_TO_RE.search(line):
            matches.append(RuleMatch(line=index + 1))
    return matches


def check_navigate_to_in_setup(content: str, script: str, template: str) -> list[RuleMatch]:
    _ = (content, template)
    return find_setup_level_navigations(script.split("\n"))


RULES = (
    PatternRule(
        rule_id="nuxt-fetch-in-mounted",
        severity="error",
        category=NUXT,
        frameworks=NUXT_FRAMEWORKS,
        script_pattern=FETCH_IN_MOUNTED_RE,
        message="Data fetching composable used inside onMounted()",
        help=(
            "Move useFetch/useAsyncData to the top level of <script setup> — "
            "they are designed to run during SSR"
        ),
    ),
    PredicateRule(
        rule_id="nuxt-no-navigate-to-in-setup",
        severity="warning",
        category=NUXT,
        frameworks=NUXT_FRAMEWORKS,
        predicate=check_navigate_to_in_setup,
        line_base="script",
        message="navigateTo() called at setup level without return",
        help=(
            "Use `return navigateTo('/path')` — without return, "
            "the navigation may not work correctly"
        ),
    ),
)
