"""Scan orchestration: run analyzers concurrently, combine, and score."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Protocol

from vue_doctor.combine import combine_diagnostics
from vue_doctor.config import DoctorConfig, load_config
from vue_doctor.diagnostic import Diagnostic
from vue_doctor.engine import PLUGIN_NAME, run_custom_rules
from vue_doctor.project import ProjectError, ProjectInfo, discover_project
from vue_doctor.rules import RuleCatalog, build_catalog
from vue_doctor.scoring import ScoreResult, calculate_score

logger = logging.getLogger(__name__)

AnalyzerKind = Literal["lint", "dead-code"]


class Analyzer(Protocol):
    """A source of diagnostics, already in :class:`Diagnostic` shape."""

    name: str
    kind: AnalyzerKind

    def run(self, root: Path, include_paths: list[Path] | None) -> list[Diagnostic]:
        """Analyze ``root`` (or only ``include_paths``) and return diagnostics."""


class CustomRulesAnalyzer:
    """Vue-specific anti-pattern rules."""

    name = PLUGIN_NAME
    kind: AnalyzerKind = "lint"

    def __init__(self, project: ProjectInfo, catalog: RuleCatalog) -> None:
        self._project = project
        self._catalog = catalog

    def run(self, root: Path, include_paths: list[Path] | None) -> list[Diagnostic]:
        return run_custom_rules(root, self._project, include_paths, catalog=self._catalog)


@dataclass(slots=True)
class AnalyzerRun:
    """Per-analyzer execution record."""

    name: str
    kind: str
    status: str
    reason: str
    elapsed_ms: int | None = None
    diagnostics: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "kind": self.kind,
            "status": self.status,
            "reason": self.reason,
            "elapsed_ms": self.elapsed_ms,
            "diagnostics": self.diagnostics,
        }


@dataclass(slots=True)
class DiagnoseResult:
    """Everything a scan produces."""

    diagnostics: list[Diagnostic]
    score: ScoreResult
    project: ProjectInfo
    elapsed_ms: float
    analyzer_runs: list[AnalyzerRun] = field(default_factory=list)
    config: DoctorConfig | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for item in self.diagnostics if item.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for item in self.diagnostics if item.severity == "warning")


def diagnose(
    directory: Path,
    *,
    lint: bool | None = None,
    dead_code: bool | None = None,
    include_paths: list[Path] | None = None,
    analyzers: tuple[Analyzer, ...] | list[Analyzer] = (),
    catalog: RuleCatalog | None = None,
    config_path: Path | None = None,
) -> DiagnoseResult:
    """Diagnose a Vue project directory.

    External ``analyzers`` and the built-in rule engine run concurrently.
    A failing analyzer contributes no diagnostics; the scan still completes.
    A non-empty ``include_paths`` switches to diff mode, which skips
    dead-code analyzers.
    """
    start = time.perf_counter()
    root = directory.resolve()
    project = discover_project(root)
    if project.vue_version is None:
        raise ProjectError(
            "No Vue dependency found in package.json. "
            "Make sure you are running vue-doctor from a Vue project root."
        )

    config = _load_config_best_effort(root, config_path)
    effective_lint = _first_set(lint, config.lint if config else None, True)
    effective_dead_code = _first_set(dead_code, config.dead_code if config else None, True)
    diff_mode = bool(include_paths)

    active_catalog = catalog if catalog is not None else _catalog_from_config(config)
    scheduled: list[Analyzer] = [*analyzers, CustomRulesAnalyzer(project, active_catalog)]

    runs: list[AnalyzerRun] = []
    enabled: list[tuple[Analyzer, AnalyzerRun]] = []
    for analyzer in scheduled:
        skip_reason = _skip_reason(
            analyzer,
            lint=effective_lint,
            dead_code=effective_dead_code,
            diff_mode=diff_mode,
        )
        run = AnalyzerRun(
            name=analyzer.name,
            kind=analyzer.kind,
            status="skipped" if skip_reason else "scheduled",
            reason=skip_reason or "",
        )
        runs.append(run)
        if not skip_reason:
            enabled.append((analyzer, run))

    scoped_paths = include_paths if diff_mode else None
    results: list[list[Diagnostic]] = []
    if enabled:
        with ThreadPoolExecutor(max_workers=len(enabled)) as executor:
            futures = [
                executor.submit(_run_analyzer, analyzer, run, root, scoped_paths)
                for analyzer, run in enabled
            ]
            results = [future.result() for future in futures]

    diagnostics = combine_diagnostics(results, root, config)
    return DiagnoseResult(
        diagnostics=diagnostics,
        score=calculate_score(diagnostics),
        project=project,
        elapsed_ms=(time.perf_counter() - start) * 1000,
        analyzer_runs=runs,
        config=config,
    )


def _run_analyzer(
    analyzer: Analyzer,
    run: AnalyzerRun,
    root: Path,
    include_paths: list[Path] | None,
) -> list[Diagnostic]:
    start = time.perf_counter()
    try:
        diagnostics = analyzer.run(root, include_paths)
        run.status = "ran"
        run.reason = "completed"
        run.diagnostics = len(diagnostics)
        return diagnostics
    except Exception as exc:
        logger.warning("Analyzer %s failed: %s: %s", analyzer.name, exc.__class__.__name__, exc)
        run.status = "failed"
        run.reason = f"{exc.__class__.__name__}: {exc}"
        run.diagnostics = 0
        return []
    finally:
        run.elapsed_ms = int((time.perf_counter() - start) * 1000)


def _skip_reason(
    analyzer: Analyzer,
    *,
    lint: bool,
    dead_code: bool,
    diff_mode: bool,
) -> str | None:
    if analyzer.kind == "lint" and not lint:
        return "lint disabled"
    if analyzer.kind == "dead-code":
        if not dead_code:
            return "dead code detection disabled"
        if diff_mode:
            return "not run in diff mode"
    return None


def _load_config_best_effort(root: Path, config_path: Path | None) -> DoctorConfig | None:
    try:
        return load_config(root, config_path=config_path)
    except ValueError as exc:
        logger.warning("Ignoring invalid configuration: %s", exc)
        return None


def _catalog_from_config(config: DoctorConfig | None) -> RuleCatalog:
    if config is None:
        return build_catalog()
    try:
        return build_catalog(
            enabled_rule_ids=config.rule_enable,
            disabled_rule_ids=config.rule_disable,
        )
    except ValueError as exc:
        logger.warning("Ignoring rule selection from %s: %s", config.source, exc)
        return build_catalog()


def _first_set(*values: bool | None) -> bool:
    for value in values:
        if value is not None:
            return value
    return True
