"""Configuration loading for vue-doctor."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from vue_doctor.project import read_package_json

JSON_CONFIG_FILENAMES = (".vue-doctorrc", ".vue-doctorrc.json", "vue-doctor.config.json")
TOML_CONFIG_FILENAMES = (".vue-doctor.toml", "vue-doctor.toml")
PACKAGE_JSON_FILENAME = "package.json"
PACKAGE_JSON_KEY = "vueDoctor"


@dataclass(slots=True)
class IgnoreConfig:
    """Suppressions applied when combining diagnostics."""

    rules: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"rules": list(self.rules), "files": list(self.files)}


@dataclass(slots=True)
class DoctorConfig:
    """User configuration resolved from project files."""

    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    lint: bool | None = None
    dead_code: bool | None = None
    verbose: bool | None = None
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ignore": self.ignore.to_dict(),
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "lint": self.lint,
            "dead_code": self.dead_code,
            "verbose": self.verbose,
            "source": self.source,
        }


def load_config(root: Path, config_path: Path | None = None) -> DoctorConfig | None:
    """Load config from an explicit path or project-local files.

    Dedicated config files win over the ``vueDoctor`` key of
    ``package.json``. Returns ``None`` when nothing is configured; raises
    ``ValueError`` for unreadable or invalid configuration.
    """
    root = root.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (root / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        return _from_mapping(_load_file(resolved), source=str(resolved))

    for filename in (*JSON_CONFIG_FILENAMES, *TOML_CONFIG_FILENAMES):
        resolved = root / filename
        if resolved.exists():
            return _from_mapping(_load_file(resolved), source=str(resolved))

    package_path = root / PACKAGE_JSON_FILENAME
    section = read_package_json(package_path).get(PACKAGE_JSON_KEY)
    if isinstance(section, dict):
        return _from_mapping(section, source=f"{package_path}#{PACKAGE_JSON_KEY}")

    return None


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            "lint = true",
            "dead_code = true",
            "verbose = false",
            "",
            "[ignore]",
            'rules = ["perf-giant-component"]',
            'files = ["src/legacy/**", "**/*.generated.vue"]',
            "",
            "[rules]",
            '# enable = ["reactivity-destructure-props", "reactivity-ref-no-value"]',
            'disable = ["arch-mixed-api-styles"]',
            "",
        ]
    )


def _load_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        return _load_toml(path)
    return _load_json(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ValueError(f"Cannot read config file {path}: {exc}") from exc
    return loaded


def _load_json(path: Path) -> dict[str, Any]:
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise ValueError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must contain an object")
    return loaded


def _from_mapping(mapping: dict[str, Any], *, source: str) -> DoctorConfig:
    ignore_mapping = _as_table(mapping.get("ignore"), "ignore")
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    return DoctorConfig(
        ignore=IgnoreConfig(
            rules=_as_str_list(ignore_mapping.get("rules"), "ignore.rules"),
            files=_as_str_list(ignore_mapping.get("files"), "ignore.files"),
        ),
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable"), "rules.enable"),
        rule_disable=_as_str_list(rules_mapping.get("disable"), "rules.disable"),
        lint=_as_optional_bool(mapping.get("lint"), "lint"),
        dead_code=_as_optional_bool(_first_key(mapping, "deadCode", "dead_code"), "dead_code"),
        verbose=_as_optional_bool(mapping.get("verbose"), "verbose"),
        source=source,
    )


def _first_key(mapping: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in mapping:
            return mapping[key]
    return None


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value, field_name)


def _as_optional_bool(raw: Any, field_name: str) -> bool | None:
    if raw is None:
        return None
    if not isinstance(raw, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return raw
