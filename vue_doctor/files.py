"""Candidate component file selection."""

from __future__ import annotations

import logging
from pathlib import Path

from vue_doctor.git import GitError, list_project_files

logger = logging.getLogger(__name__)

COMPONENT_SUFFIX = ".vue"


def select_component_files(
    root: Path,
    include_paths: list[Path] | list[str] | None = None,
) -> list[Path]:
    """Return component files to scan.

    A non-empty ``include_paths`` (diff mode) is filtered to component files
    and kept in order; otherwise the repository's file inventory is used.
    """
    if include_paths:
        selected: list[Path] = []
        for item in include_paths:
            path = Path(item)
            if path.suffix != COMPONENT_SUFFIX:
                continue
            selected.append(path if path.is_absolute() else root / path)
        return selected

    try:
        inventory = list_project_files(root)
    except GitError as exc:
        logger.debug("Cannot enumerate files in %s: %s", root, exc)
        return []
    return [root / name for name in inventory if name.endswith(COMPONENT_SUFFIX)]
