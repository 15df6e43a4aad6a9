"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from vue_doctor import __version__
from vue_doctor.diagnostic import Diagnostic
from vue_doctor.doctor import DiagnoseResult
from vue_doctor.project import ProjectInfo
from vue_doctor.scoring import SCORE_THRESHOLDS, ScoreResult

RULE_SEPARATOR = "  " + "─" * 40


def render_project_info(project: ProjectInfo) -> str:
    """Render the project header."""
    details: list[str] = []
    if project.vue_version:
        details.append(f"Vue {project.vue_version}")
    details.append(project.framework_display_name)
    if project.has_typescript:
        details.append("TypeScript")
    if project.has_pinia:
        details.append("Pinia")
    if project.has_vuex:
        details.append("Vuex")
    if project.has_vue_router:
        details.append("Vue Router")

    lines = [
        click.style("  Vue Doctor", bold=True),
        "",
        f"  {click.style('Project:', dim=True)} {' · '.join(details)}",
        f"  {click.style('Files:', dim=True)}   {project.source_file_count} source files",
        "",
    ]
    return "\n".join(lines)


def render_summary(diagnostics: list[Diagnostic]) -> str:
    """Render per-category error/warning counts."""
    if not diagnostics:
        return f"  {click.style('✓', fg='green')} No issues found!\n"

    lines: list[str] = []
    for category, items in _group_by_category(diagnostics).items():
        errors = sum(1 for item in items if item.severity == "error")
        warnings = len(items) - errors
        counts: list[str] = []
        if errors:
            counts.append(click.style(_plural(errors, "error"), fg="red"))
        if warnings:
            counts.append(click.style(_plural(warnings, "warning"), fg="yellow"))
        lines.append(f"  {click.style(category, bold=True)} — {', '.join(counts)}")
    lines.append("")
    return "\n".join(lines)


def render_verbose(diagnostics: list[Diagnostic]) -> str:
    """Render every diagnostic grouped by category."""
    if not diagnostics:
        return render_summary(diagnostics)

    lines: list[str] = []
    for category, items in _group_by_category(diagnostics).items():
        lines.append(f"  {click.style(category, bold=True, underline=True)}")
        lines.append("")
        for item in items:
            color = _severity_color(item.severity)
            icon = "✖" if item.severity == "error" else "⚠"
            location = click.style(f"{item.file_path}:{item.line}:{item.column}", dim=True)
            lines.append(
                f"  {click.style(icon, fg=color)} {click.style(item.rule, fg=color)} {location}"
            )
            lines.append(f"    {item.message}")
            if item.help:
                lines.append(f"    {click.style('→ ' + item.help, dim=True)}")
            lines.append("")
    return "\n".join(lines)


def render_fix(diagnostics: list[Diagnostic]) -> str:
    """Render a structured listing suited to automated fixing."""
    if not diagnostics:
        return "  No issues found — nothing to fix.\n"

    lines = [click.style("  Diagnostics for auto-fix:", bold=True), ""]
    for item in diagnostics:
        lines.append(click.style(RULE_SEPARATOR, dim=True))
        lines.append(f"  File:     {item.file_path}:{item.line}:{item.column}")
        lines.append(f"  Rule:     {item.rule}")
        lines.append(f"  Severity: {click.style(item.severity, fg=_severity_color(item.severity))}")
        lines.append(f"  Issue:    {item.message}")
        if item.help:
            lines.append(f"  Fix:      {item.help}")
        lines.append("")
    return "\n".join(lines)


def render_score(result: DiagnoseResult) -> str:
    """Render the final health score block."""
    color = _score_color(result.score.score)
    elapsed = f"{result.elapsed_ms / 1000:.1f}s"
    lines = [
        click.style(RULE_SEPARATOR, dim=True),
        "",
        "  "
        + click.style("Health Score:", bold=True)
        + " "
        + click.style(str(result.score.score), fg=color, bold=True)
        + " "
        + click.style(f"({result.score.label})", fg=color),
        "",
        "  "
        + click.style(_plural(result.error_count, "error"), fg="red")
        + "  "
        + click.style(_plural(result.warning_count, "warning"), fg="yellow")
        + "  "
        + click.style(elapsed, dim=True),
        "",
    ]
    return "\n".join(lines)


def render_score_only(score: ScoreResult) -> str:
    return str(score.score)


def render_json(result: DiagnoseResult, *, diff_base: str | None = None) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(result, diff_base=diff_base), sort_keys=True)


def build_json_payload(result: DiagnoseResult, *, diff_base: str | None = None) -> dict[str, Any]:
    """Build stable JSON payload for CI and automation."""
    meta: dict[str, Any] = {
        "generated_at": datetime.now(tz=UTC)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z"),
        "version": __version__,
        "diff_base": diff_base,
        "config_source": result.config.source if result.config else None,
        "elapsed_ms": round(result.elapsed_ms),
        "analyzers": [run.to_dict() for run in result.analyzer_runs],
    }
    return {
        "score": result.score.to_dict(),
        "project": result.project.to_dict(),
        "diagnostics": [item.to_dict() for item in result.diagnostics],
        "meta": meta,
    }


def _group_by_category(diagnostics: list[Diagnostic]) -> dict[str, list[Diagnostic]]:
    grouped: dict[str, list[Diagnostic]] = {}
    for item in diagnostics:
        grouped.setdefault(item.category, []).append(item)
    return grouped


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _severity_color(severity: str) -> str:
    return "red" if severity == "error" else "yellow"


def _score_color(score: int) -> str:
    if score >= SCORE_THRESHOLDS["great"]:
        return "green"
    if score >= SCORE_THRESHOLDS["needs_work"]:
        return "yellow"
    return "red"
