"""Component architecture rules."""

from __future__ import annotations

import re

from vue_doctor.diagnostic import ARCHITECTURE
from vue_doctor.rules.base import PredicateRule, RuleMatch

SETUP_SCRIPT_RE = re.compile(r"<script[^>]*\bsetup\b")
OPTIONS_API_RE = re.compile(
    r"export\s+default\s*\{.*?"
    r"(?:data\s*\(\s*\)|methods\s*:|computed\s*:|watch\s*:|mounted\s*\(\s*\)|created\s*\(\s*\))",
    re.DOTALL,
)
COMPOSITION_API_RE = re.compile(
    r"\b(?:ref|reactive|computed|watch|onMounted|defineProps|defineEmits)\s*\("
)


def check_mixed_api_styles(content: str, script: str, template: str) -> list[RuleMatch]:
    _ = (script, template)
    has_setup_script = SETUP_SCRIPT_RE.search(content) is not None
    has_options_api = OPTIONS_API_RE.search(content) is not None
    has_composition_api = COMPOSITION_API_RE.search(content) is not None
    if has_setup_script or not (has_options_api and has_composition_api):
        return []
    return [
        RuleMatch(
            line=1,
            message=(
                "Component mixes Options API and Composition API — "
                "pick one style for consistency"
            ),
        )
    ]


RULES = (
    PredicateRule(
        rule_id="arch-mixed-api-styles",
        severity="warning",
        category=ARCHITECTURE,
        predicate=check_mixed_api_styles,
        line_base="file",
        message="Mixed Options API and Composition API in the same component",
        help=(
            "Migrate to Composition API with <script setup> for consistency "
            "and better TypeScript support"
        ),
    ),
)
