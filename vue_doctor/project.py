"""Project discovery: Vue version, meta-framework, and tooling flags."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from vue_doctor.git import GitError, filter_source_files, list_project_files

logger = logging.getLogger(__name__)

Framework = Literal["nuxt3", "nuxt2", "vite", "vue-cli", "unknown"]

NUXT_CONFIG_FILENAMES = ("nuxt.config.ts", "nuxt.config.js", "nuxt.config.mjs", "nuxt.config.cjs")
VITE_CONFIG_FILENAMES = ("vite.config.ts", "vite.config.js", "vite.config.mjs", "vite.config.cjs")
VUE_CLI_CONFIG_FILENAMES = ("vue.config.js", "vue.config.ts", "vue.config.cjs")

FRAMEWORK_DISPLAY_NAMES: dict[str, str] = {
    "nuxt3": "Nuxt 3",
    "nuxt2": "Nuxt 2",
    "vite": "Vite",
    "vue-cli": "Vue CLI",
    "unknown": "Vue",
}

NUXT2_VERSION_RE = re.compile(r"[~^]?2\.")


class ProjectError(RuntimeError):
    """Raised when the directory is not a Vue project."""


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    """Detected project setup."""

    vue_version: str | None
    framework: Framework
    framework_display_name: str
    has_typescript: bool = False
    has_pinia: bool = False
    has_vuex: bool = False
    has_vue_router: bool = False
    source_file_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "vue_version": self.vue_version,
            "framework": self.framework,
            "framework_display_name": self.framework_display_name,
            "has_typescript": self.has_typescript,
            "has_pinia": self.has_pinia,
            "has_vuex": self.has_vuex,
            "has_vue_router": self.has_vue_router,
            "source_file_count": self.source_file_count,
        }


def discover_project(root: Path) -> ProjectInfo:
    """Inspect ``package.json`` and config files under ``root``."""
    package = read_package_json(root / "package.json")
    deps = _collect_dependencies(package)
    framework = detect_framework(root, deps)
    return ProjectInfo(
        vue_version=deps.get("vue"),
        framework=framework,
        framework_display_name=format_framework_name(framework),
        has_typescript=(root / "tsconfig.json").exists(),
        has_pinia="pinia" in deps,
        has_vuex="vuex" in deps,
        has_vue_router="vue-router" in deps,
        source_file_count=_count_source_files(root),
    )


def detect_framework(root: Path, deps: dict[str, str]) -> Framework:
    """Nuxt wins over Vite, which wins over Vue CLI.

    The Nuxt 2 version check is anchored at the start of the range, so
    ``^3.12.0`` or ``3.2.1`` stay Nuxt 3.
    """
    if "nuxt" in deps or _has_any_file(root, NUXT_CONFIG_FILENAMES):
        if NUXT2_VERSION_RE.match(deps.get("nuxt", "")):
            return "nuxt2"
        return "nuxt3"
    if "vite" in deps or _has_any_file(root, VITE_CONFIG_FILENAMES):
        return "vite"
    if "@vue/cli-service" in deps or _has_any_file(root, VUE_CLI_CONFIG_FILENAMES):
        return "vue-cli"
    return "unknown"


def format_framework_name(framework: str) -> str:
    return FRAMEWORK_DISPLAY_NAMES.get(framework, FRAMEWORK_DISPLAY_NAMES["unknown"])


def read_package_json(path: Path) -> dict[str, Any]:
    """Return parsed ``package.json``, or an empty mapping when unusable."""
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _collect_dependencies(package: dict[str, Any]) -> dict[str, str]:
    merged: dict[str, str] = {}
    for section in ("peerDependencies", "dependencies", "devDependencies"):
        value = package.get(section)
        if not isinstance(value, dict):
            continue
        for name, version in value.items():
            merged[str(name)] = str(version)
    return merged


def _has_any_file(root: Path, filenames: tuple[str, ...]) -> bool:
    return any((root / filename).exists() for filename in filenames)


def _count_source_files(root: Path) -> int:
    try:
        return len(filter_source_files(list_project_files(root)))
    except GitError as exc:
        logger.debug("Cannot count source files in %s: %s", root, exc)
        return 0
