"""Integration tests for git-backed file selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from vue_doctor.files import select_component_files
from vue_doctor.git import (
    GitError,
    filter_source_files,
    get_changed_files,
    list_project_files,
)
from tests.helpers_git import commit_all, git, init_repo, write_file


def test_changed_files_against_branch(tmp_path: Path) -> None:
    repo = init_repo(tmp_path)
    write_file(repo, "src/App.vue", "<template />\n")
    write_file(repo, "src/old.ts", "export const a = 1\n")
    commit_all(repo, "baseline")

    git(repo, "checkout", "-q", "-b", "feature")
    write_file(repo, "src/App.vue", "<template><div /></template>\n")
    write_file(repo, "src/New.vue", "<template />\n")
    write_file(repo, "docs/notes.md", "notes\n")
    (repo / "src/old.ts").unlink()
    commit_all(repo, "feature work")

    diff = get_changed_files(repo, "main")

    assert diff.base == "main"
    assert diff.file_count == 2
    assert diff.changed_files == [repo.resolve() / "src/App.vue", repo.resolve() / "src/New.vue"]


def test_unknown_base_falls_back_to_previous_commit(tmp_path: Path) -> None:
    repo = init_repo(tmp_path)
    write_file(repo, "src/App.vue", "<template />\n")
    commit_all(repo, "one")
    write_file(repo, "src/store.ts", "export const s = 1\n")
    commit_all(repo, "two")

    diff = get_changed_files(repo, "does-not-exist")

    assert diff.base == "HEAD~1"
    assert diff.changed_files == [repo.resolve() / "src/store.ts"]


def test_no_resolvable_base_yields_empty_result(tmp_path: Path) -> None:
    repo = init_repo(tmp_path)
    write_file(repo, "src/App.vue", "<template />\n")
    commit_all(repo, "only")

    diff = get_changed_files(repo, "does-not-exist")

    assert diff.base == "does-not-exist"
    assert diff.changed_files == []


def test_list_project_files_respects_gitignore(tmp_path: Path) -> None:
    repo = init_repo(tmp_path)
    write_file(repo, ".gitignore", "node_modules/\n")
    write_file(repo, "src/App.vue", "<template />\n")
    write_file(repo, "node_modules/pkg/Comp.vue", "<template />\n")
    commit_all(repo, "baseline")
    write_file(repo, "src/Draft.vue", "<template />\n")

    assert sorted(list_project_files(repo)) == [".gitignore", "src/App.vue", "src/Draft.vue"]


def test_list_project_files_outside_repo_raises(tmp_path: Path) -> None:
    with pytest.raises(GitError):
        list_project_files(tmp_path)


def test_filter_source_files() -> None:
    paths = ["a.vue", "b.ts", "c.tsx", "d.md", "e.css", "f.mjs", "g.json"]
    assert filter_source_files(paths) == ["a.vue", "b.ts", "c.tsx", "f.mjs"]


def test_select_component_files_in_diff_mode(tmp_path: Path) -> None:
    absolute = tmp_path / "src" / "B.vue"
    selected = select_component_files(tmp_path, ["src/A.vue", "src/util.ts", absolute])
    assert selected == [tmp_path / "src/A.vue", absolute]


def test_non_ascii_paths_are_listed_unquoted(tmp_path: Path) -> None:
    repo = init_repo(tmp_path)
    write_file(repo, "src/Café.vue", "<template />\n")
    commit_all(repo, "baseline")
    write_file(repo, "src/Über.vue", "<template />\n")

    assert sorted(list_project_files(repo)) == ["src/Café.vue", "src/Über.vue"]

    git(repo, "checkout", "-q", "-b", "feature")
    write_file(repo, "src/Café.vue", "<template><div /></template>\n")
    commit_all(repo, "feature")

    diff = get_changed_files(repo, "main")
    resolved = repo.resolve()
    assert diff.changed_files == [resolved / "src/Café.vue", resolved / "src/Über.vue"]
