"""Tests for scan orchestration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from vue_doctor.diagnostic import Diagnostic
from vue_doctor.doctor import diagnose
from vue_doctor.project import ProjectError
from vue_doctor.rules import build_catalog
from tests.helpers_git import build_component, init_repo, write_file, write_package_json

PROPS_COMPONENT = build_component(script="const { count } = defineProps(['count'])")


class FakeAnalyzer:
    def __init__(self, name: str, kind: str, diagnostics: list[Diagnostic]) -> None:
        self.name = name
        self.kind = kind
        self._diagnostics = diagnostics
        self.calls: list[list[Path] | None] = []

    def run(self, root: Path, include_paths: list[Path] | None) -> list[Diagnostic]:
        self.calls.append(include_paths)
        return list(self._diagnostics)


class FailingAnalyzer:
    name = "knip"
    kind = "dead-code"

    def run(self, root: Path, include_paths: list[Path] | None) -> list[Diagnostic]:
        raise RuntimeError("binary not found")


def _external(file_path: str, rule: str, severity: str = "warning") -> Diagnostic:
    return Diagnostic(
        file_path=file_path,
        plugin="eslint-plugin-vue",
        rule=rule,
        severity=severity,
        message=f"{rule} from eslint",
        help="",
        line=5,
        column=3,
        category="Correctness",
    )


@pytest.fixture
def vue_repo(tmp_path: Path) -> Path:
    repo = init_repo(tmp_path)
    write_package_json(repo)
    write_file(repo, "src/App.vue", PROPS_COMPONENT)
    return repo


def test_diagnose_runs_custom_rules_and_scores(vue_repo: Path) -> None:
    result = diagnose(vue_repo)

    assert [(item.file_path, item.rule, item.line) for item in result.diagnostics] == [
        ("src/App.vue", "reactivity-destructure-props", 5)
    ]
    assert result.score.score == 98
    assert result.error_count == 1
    assert result.warning_count == 0
    assert result.project.vue_version == "^3.4.0"
    assert result.config is None
    assert [(run.name, run.status) for run in result.analyzer_runs] == [("vue-doctor", "ran")]


def test_missing_vue_dependency_raises(tmp_path: Path) -> None:
    write_package_json(tmp_path, dependencies={"react": "^18.0.0"})
    with pytest.raises(ProjectError, match="No Vue dependency"):
        diagnose(tmp_path)


def test_failing_analyzer_does_not_abort_scan(vue_repo: Path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="vue_doctor.doctor"):
        result = diagnose(vue_repo, analyzers=[FailingAnalyzer()])

    runs = {run.name: run for run in result.analyzer_runs}
    assert runs["knip"].status == "failed"
    assert runs["knip"].reason == "RuntimeError: binary not found"
    assert runs["knip"].diagnostics == 0
    assert runs["vue-doctor"].status == "ran"
    assert len(result.diagnostics) == 1
    assert "Analyzer knip failed" in caplog.text


def test_external_diagnostics_are_merged_and_deduplicated(vue_repo: Path) -> None:
    absolute = str(vue_repo.resolve() / "src" / "App.vue")
    eslint = FakeAnalyzer(
        "eslint-plugin-vue",
        "lint",
        [
            _external(absolute, "vue/no-mutating-props"),
            _external(absolute, "vue/no-mutating-props"),
            _external("src/Other.vue", "vue/require-v-for-key", severity="error"),
        ],
    )

    result = diagnose(vue_repo, analyzers=[eslint])

    assert [(item.file_path, item.rule) for item in result.diagnostics] == [
        ("src/App.vue", "reactivity-destructure-props"),
        ("src/Other.vue", "vue/require-v-for-key"),
        ("src/App.vue", "vue/no-mutating-props"),
    ]
    assert [run.name for run in result.analyzer_runs] == ["eslint-plugin-vue", "vue-doctor"]
    assert result.analyzer_runs[0].diagnostics == 3


def test_lint_disabled_skips_lint_analyzers(vue_repo: Path) -> None:
    eslint = FakeAnalyzer("eslint-plugin-vue", "lint", [_external("src/A.vue", "x")])
    knip = FakeAnalyzer("knip", "dead-code", [_external("src/B.vue", "unused-file")])

    result = diagnose(vue_repo, lint=False, analyzers=[eslint, knip])

    assert eslint.calls == []
    assert [item.rule for item in result.diagnostics] == ["unused-file"]
    statuses = {run.name: (run.status, run.reason) for run in result.analyzer_runs}
    assert statuses["eslint-plugin-vue"] == ("skipped", "lint disabled")
    assert statuses["vue-doctor"] == ("skipped", "lint disabled")
    assert statuses["knip"] == ("ran", "completed")


def test_dead_code_is_skipped_in_diff_mode(vue_repo: Path) -> None:
    knip = FakeAnalyzer("knip", "dead-code", [_external("src/B.vue", "unused-file")])
    changed = [vue_repo / "src/App.vue"]

    result = diagnose(vue_repo, include_paths=changed, analyzers=[knip])

    assert knip.calls == []
    statuses = {run.name: (run.status, run.reason) for run in result.analyzer_runs}
    assert statuses["knip"] == ("skipped", "not run in diff mode")
    assert [item.rule for item in result.diagnostics] == ["reactivity-destructure-props"]


def test_include_paths_are_passed_to_lint_analyzers(vue_repo: Path) -> None:
    eslint = FakeAnalyzer("eslint-plugin-vue", "lint", [])
    changed = [vue_repo / "src/App.vue"]

    diagnose(vue_repo, include_paths=changed, analyzers=[eslint])
    diagnose(vue_repo, include_paths=[], analyzers=[eslint])

    assert eslint.calls == [changed, None]


def test_config_ignores_and_toggles_apply(vue_repo: Path) -> None:
    write_file(
        vue_repo,
        ".vue-doctorrc",
        json.dumps(
            {
                "ignore": {"rules": ["vue-doctor/reactivity-destructure-props"]},
                "deadCode": False,
            }
        ),
    )
    knip = FakeAnalyzer("knip", "dead-code", [_external("src/B.vue", "unused-file")])

    result = diagnose(vue_repo, analyzers=[knip])

    assert result.diagnostics == []
    assert result.score.score == 100
    assert result.config is not None
    assert result.config.source == str(vue_repo.resolve() / ".vue-doctorrc")
    statuses = {run.name: run.reason for run in result.analyzer_runs}
    assert statuses["knip"] == "dead code detection disabled"


def test_explicit_arguments_override_config(vue_repo: Path) -> None:
    write_file(vue_repo, ".vue-doctorrc", json.dumps({"lint": False}))
    result = diagnose(vue_repo, lint=True)
    assert [item.rule for item in result.diagnostics] == ["reactivity-destructure-props"]


def test_invalid_config_is_ignored(vue_repo: Path, caplog) -> None:
    write_file(vue_repo, ".vue-doctorrc", "{broken")

    with caplog.at_level(logging.WARNING, logger="vue_doctor.doctor"):
        result = diagnose(vue_repo)

    assert result.config is None
    assert len(result.diagnostics) == 1
    assert "Ignoring invalid configuration" in caplog.text


def test_config_rule_selection_builds_catalog(vue_repo: Path) -> None:
    write_file(
        vue_repo,
        "vue-doctor.toml",
        '[rules]\ndisable = ["reactivity-destructure-props"]\n',
    )
    assert diagnose(vue_repo).diagnostics == []


def test_unknown_rule_in_config_falls_back_to_full_catalog(vue_repo: Path) -> None:
    write_file(vue_repo, "vue-doctor.toml", '[rules]\nenable = ["no-such-rule"]\n')
    result = diagnose(vue_repo)
    assert [item.rule for item in result.diagnostics] == ["reactivity-destructure-props"]


def test_injected_catalog_wins(vue_repo: Path) -> None:
    catalog = build_catalog(enabled_rule_ids=["perf-giant-component"])
    assert diagnose(vue_repo, catalog=catalog).diagnostics == []
