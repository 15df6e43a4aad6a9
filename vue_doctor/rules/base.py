"""Rule definitions and match model."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from re import Pattern
from typing import Literal

from vue_doctor.diagnostic import Severity
from vue_doctor.sfc_parser import Block, SfcBlocks

LineBase = Literal["script", "file"]


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """A single rule hit; ``message`` overrides the rule's default text."""

    line: int
    column: int = 1
    message: str | None = None


Predicate = Callable[[str, str, str], list[RuleMatch]]


@dataclass(frozen=True, slots=True)
class PatternRule:
    """Rule applied line by line to the script and/or template region."""

    rule_id: str
    severity: Severity
    category: str
    message: str
    help: str
    script_pattern: Pattern[str] | None = None
    template_pattern: Pattern[str] | None = None
    frameworks: tuple[str, ...] | None = None

    def applies_to(self, framework: str) -> bool:
        return self.frameworks is None or framework in self.frameworks

    def find_matches(self, blocks: SfcBlocks) -> list[RuleMatch]:
        matches: list[RuleMatch] = []
        if self.script_pattern is not None:
            matches.extend(_scan_block(blocks.script, self.script_pattern))
        if self.template_pattern is not None:
            matches.extend(_scan_block(blocks.template, self.template_pattern))
        return matches


@dataclass(frozen=True, slots=True)
class PredicateRule:
    """Rule backed by a function over (content, script, template).

    The predicate reports lines relative to ``line_base``: the script region
    or the whole file.
    """

    rule_id: str
    severity: Severity
    category: str
    message: str
    help: str
    predicate: Predicate
    line_base: LineBase = "script"
    frameworks: tuple[str, ...] | None = None

    def applies_to(self, framework: str) -> bool:
        return self.frameworks is None or framework in self.frameworks

    def find_matches(self, blocks: SfcBlocks) -> list[RuleMatch]:
        raw = self.predicate(blocks.content, blocks.script.code, blocks.template.code)
        offset = blocks.script.start_line if self.line_base == "script" else 0
        if offset == 0:
            return list(raw)
        return [
            RuleMatch(line=match.line + offset, column=match.column, message=match.message)
            for match in raw
        ]


Rule = PatternRule | PredicateRule


def _scan_block(block: Block, pattern: Pattern[str]) -> list[RuleMatch]:
    if not block.code:
        return []
    return [
        RuleMatch(line=block.to_file_line(index))
        for index, line in enumerate(block.lines())
        if pattern.search(line)
    ]
