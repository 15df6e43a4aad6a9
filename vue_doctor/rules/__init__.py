"""Rules package."""

from collections.abc import Iterator
from dataclasses import dataclass

from vue_doctor.rules import architecture, nuxt, performance, pinia, reactivity
from vue_doctor.rules.base import PatternRule, PredicateRule, Rule, RuleMatch

__all__ = [
    "PatternRule",
    "PredicateRule",
    "Rule",
    "RuleCatalog",
    "RuleInfo",
    "RuleMatch",
    "build_catalog",
    "default_catalog",
    "list_rule_info",
]


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing."""

    rule_id: str
    severity: str
    category: str
    kind: str
    frameworks: tuple[str, ...] | None
    message: str
    help: str


@dataclass(frozen=True, slots=True)
class RuleCatalog:
    """Immutable, ordered set of rule definitions."""

    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        duplicates: set[str] = set()
        for rule in self.rules:
            if rule.rule_id in seen:
                duplicates.add(rule.rule_id)
            seen.add(rule.rule_id)
        if duplicates:
            joined = ", ".join(sorted(duplicates))
            raise ValueError(f"Duplicate rule ids: {joined}")

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self.rules]

    def get(self, rule_id: str) -> Rule | None:
        for rule in self.rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def applicable(self, framework: str) -> list[Rule]:
        """Rules that apply to ``framework``; framework-restricted rules drop out."""
        return [rule for rule in self.rules if rule.applies_to(framework)]


def default_catalog() -> RuleCatalog:
    """Return the built-in rule catalog."""
    return RuleCatalog(rules=_ordered_rules())


def build_catalog(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
) -> RuleCatalog:
    """Build a reduced catalog applying enable/disable filters."""
    rules = _ordered_rules()
    registry = {rule.rule_id: rule for rule in rules}
    requested_ids = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])

    unknown = [rule_id for rule_id in requested_ids if rule_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    disabled_set = set(disabled_rule_ids or [])
    if enabled_rule_ids is None:
        selected_ids = [rule.rule_id for rule in rules]
    else:
        selected_ids = _dedupe(enabled_rule_ids)
    return RuleCatalog(
        rules=tuple(registry[rule_id] for rule_id in selected_ids if rule_id not in disabled_set)
    )


def list_rule_info(catalog: RuleCatalog | None = None) -> list[RuleInfo]:
    """Return metadata for every rule in ``catalog`` (default: built-in)."""
    active = catalog if catalog is not None else default_catalog()
    return [
        RuleInfo(
            rule_id=rule.rule_id,
            severity=rule.severity,
            category=rule.category,
            kind="pattern" if isinstance(rule, PatternRule) else "predicate",
            frameworks=rule.frameworks,
            message=rule.message,
            help=rule.help,
        )
        for rule in active
    ]


def _ordered_rules() -> tuple[Rule, ...]:
    return (
        *reactivity.RULES,
        *performance.RULES,
        *nuxt.RULES,
        *pinia.RULES,
        *architecture.RULES,
    )


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output
