"""Custom rule engine for component files."""

from __future__ import annotations

import logging
from pathlib import Path

from vue_doctor.diagnostic import Diagnostic
from vue_doctor.files import select_component_files
from vue_doctor.project import ProjectInfo
from vue_doctor.rules import RuleCatalog, default_catalog
from vue_doctor.rules.base import Rule
from vue_doctor.sfc_parser import split_sfc

logger = logging.getLogger(__name__)

PLUGIN_NAME = "vue-doctor"


def run_custom_rules(
    root: Path,
    project: ProjectInfo,
    include_paths: list[Path] | list[str] | None = None,
    *,
    catalog: RuleCatalog | None = None,
) -> list[Diagnostic]:
    """Apply every applicable rule to every candidate component file.

    Framework-restricted rules are dropped before any file is read. Files
    that cannot be read are skipped.
    """
    active_catalog = catalog if catalog is not None else default_catalog()
    rules = active_catalog.applicable(project.framework)
    if not rules:
        return []

    diagnostics: list[Diagnostic] = []
    for path in select_component_files(root, include_paths):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable file %s: %s", path, exc)
            continue
        diagnostics.extend(check_file(str(path), content, rules))
    return diagnostics


def check_file(file_path: str, content: str, rules: list[Rule]) -> list[Diagnostic]:
    """Run ``rules`` against one component's text."""
    blocks = split_sfc(content)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        try:
            matches = rule.find_matches(blocks)
        except Exception as exc:
            logger.warning(
                "Rule %s failed on %s: %s: %s",
                rule.rule_id,
                file_path,
                exc.__class__.__name__,
                exc,
            )
            continue

        for match in matches:
            diagnostics.append(
                Diagnostic(
                    file_path=file_path,
                    plugin=PLUGIN_NAME,
                    rule=rule.rule_id,
                    severity=rule.severity,
                    message=match.message if match.message is not None else rule.message,
                    help=rule.help,
                    line=match.line,
                    column=match.column,
                    category=rule.category,
                )
            )
    return diagnostics
