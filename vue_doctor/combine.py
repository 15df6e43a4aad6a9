"""Merge, filter, deduplicate, and order diagnostics from all analyzers."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import replace
from functools import lru_cache
from pathlib import Path

from vue_doctor.config import DoctorConfig
from vue_doctor.diagnostic import KNOWN_CATEGORIES, OTHER, Diagnostic, coerce_severity


def combine_diagnostics(
    sources: Iterable[list[Diagnostic]],
    root: Path,
    config: DoctorConfig | None = None,
) -> list[Diagnostic]:
    """Combine analyzer outputs into one ordered list.

    Steps run in a fixed order: concatenate, normalize (root-relative paths,
    error/warning severity, known category), drop ignored rules, drop
    ignored files, keep the first diagnostic per ``(file_path, line, rule)``,
    then sort errors first and by path.
    """
    combined = [item for source in sources for item in source]
    combined = [_normalize(item, root) for item in combined]

    ignored_rules = set(config.ignore.rules) if config is not None else set()
    if ignored_rules:
        combined = [
            item
            for item in combined
            if item.rule not in ignored_rules and f"{item.plugin}/{item.rule}" not in ignored_rules
        ]

    ignored_files = list(config.ignore.files) if config is not None else []
    if ignored_files:
        combined = [
            item
            for item in combined
            if not any(match_glob(item.file_path, pattern) for pattern in ignored_files)
        ]

    return sort_diagnostics(dedupe_diagnostics(combined))


def dedupe_diagnostics(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    """Keep the first diagnostic for each ``(file_path, line, rule)``."""
    seen: set[tuple[str, int, str]] = set()
    output: list[Diagnostic] = []
    for item in diagnostics:
        if item.key in seen:
            continue
        seen.add(item.key)
        output.append(item)
    return output


def sort_diagnostics(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    """Stable sort: errors before warnings, then by file path."""
    return sorted(
        diagnostics,
        key=lambda item: (0 if item.severity == "error" else 1, item.file_path),
    )


def match_glob(path: str, pattern: str) -> bool:
    """Anchored glob match where ``*`` stops at ``/`` and ``**`` does not."""
    return compile_glob(pattern).fullmatch(path) is not None


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts))


def _normalize(diagnostic: Diagnostic, root: Path) -> Diagnostic:
    file_path = diagnostic.file_path
    if os.path.isabs(file_path):
        file_path = Path(os.path.relpath(file_path, root)).as_posix()
    severity = coerce_severity(diagnostic.severity)
    category = diagnostic.category if diagnostic.category in KNOWN_CATEGORIES else OTHER
    if (file_path, severity, category) == (
        diagnostic.file_path,
        diagnostic.severity,
        diagnostic.category,
    ):
        return diagnostic
    return replace(diagnostic, file_path=file_path, severity=severity, category=category)
