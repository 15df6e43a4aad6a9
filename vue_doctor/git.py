"""Git subprocess helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CalledProcessError, run

logger = logging.getLogger(__name__)

SOURCE_FILE_SUFFIXES = (".vue", ".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs")
DEFAULT_DIFF_BASE = "main"
FALLBACK_DIFF_BASE = "HEAD~1"


class GitError(RuntimeError):
    """Raised when git command execution fails."""


@dataclass(slots=True)
class DiffInfo:
    """Changed source files relative to a base revision."""

    base: str
    changed_files: list[Path] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.changed_files)


def list_project_files(repo: Path) -> list[str]:
    """Return tracked plus untracked-but-not-ignored paths, relative to ``repo``."""
    output = _run_git(repo, ["ls-files", "--cached", "--others", "--exclude-standard"])
    return [item for item in output.split("\n") if item]


def get_changed_files(repo: Path, base: str = DEFAULT_DIFF_BASE) -> DiffInfo:
    """Return source files added/copied/modified/renamed versus ``base``.

    Falls back to ``HEAD~1`` when ``base`` cannot be resolved, and to an
    empty result when that fails too.
    """
    resolved = repo.resolve()
    for candidate in (base, FALLBACK_DIFF_BASE):
        try:
            output = _run_git(resolved, ["diff", "--name-only", "--diff-filter=ACMR", candidate])
        except GitError as exc:
            logger.debug("git diff against %s failed: %s", candidate, exc)
            continue
        names = [item for item in output.split("\n") if item]
        return DiffInfo(
            base=candidate,
            changed_files=[resolved / name for name in filter_source_files(names)],
        )
    return DiffInfo(base=base)


def filter_source_files(paths: list[str]) -> list[str]:
    """Keep only script and component source files."""
    return [path for path in paths if path.endswith(SOURCE_FILE_SUFFIXES)]


def _run_git(repo: Path, args: list[str]) -> str:
    try:
        completed = run(
            ["git", "-c", "core.quotePath=false", *args],
            cwd=repo,
            check=True,
            capture_output=True,
            text=True,
        )
    except CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise GitError(stderr or f"git {' '.join(args)} failed") from exc
    except OSError as exc:
        raise GitError(f"git is not available: {exc}") from exc

    return completed.stdout
