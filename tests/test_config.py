"""Tests for configuration discovery and validation."""

from __future__ import annotations

import json
import tomllib
from pathlib import Path

import pytest

from vue_doctor.config import default_config_template, load_config


def test_no_config_returns_none(tmp_path: Path) -> None:
    assert load_config(tmp_path) is None


def test_json_rc_file_is_loaded(tmp_path: Path) -> None:
    (tmp_path / ".vue-doctorrc").write_text(
        json.dumps(
            {
                "ignore": {"rules": ["perf-giant-component"], "files": ["src/legacy/**"]},
                "lint": False,
                "deadCode": False,
                "verbose": True,
            }
        ),
        encoding="utf-8",
    )

    config = load_config(tmp_path)
    assert config is not None
    assert config.ignore.rules == ["perf-giant-component"]
    assert config.ignore.files == ["src/legacy/**"]
    assert config.lint is False
    assert config.dead_code is False
    assert config.verbose is True
    assert config.source == str(tmp_path.resolve() / ".vue-doctorrc")


def test_toml_file_supports_rule_selection(tmp_path: Path) -> None:
    (tmp_path / "vue-doctor.toml").write_text(
        "\n".join(
            [
                "dead_code = true",
                "",
                "[ignore]",
                'files = ["**/*.generated.vue"]',
                "",
                "[rules]",
                'enable = ["reactivity-destructure-props"]',
                'disable = ["arch-mixed-api-styles"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(tmp_path)
    assert config is not None
    assert config.dead_code is True
    assert config.lint is None
    assert config.ignore.rules == []
    assert config.ignore.files == ["**/*.generated.vue"]
    assert config.rule_enable == ["reactivity-destructure-props"]
    assert config.rule_disable == ["arch-mixed-api-styles"]


def test_package_json_key_is_used_as_fallback(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"dependencies": {"vue": "^3.4.0"}, "vueDoctor": {"lint": False}}),
        encoding="utf-8",
    )

    config = load_config(tmp_path)
    assert config is not None
    assert config.lint is False
    assert config.source is not None
    assert config.source.endswith("package.json#vueDoctor")


def test_dedicated_file_wins_over_package_json(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"vueDoctor": {"lint": False}}), encoding="utf-8"
    )
    (tmp_path / "vue-doctor.config.json").write_text(json.dumps({"lint": True}), encoding="utf-8")
    (tmp_path / ".vue-doctor.toml").write_text("lint = false\n", encoding="utf-8")

    config = load_config(tmp_path)
    assert config is not None
    assert config.lint is True
    assert config.source == str(tmp_path.resolve() / "vue-doctor.config.json")


def test_explicit_config_path(tmp_path: Path) -> None:
    custom = tmp_path / "configs" / "doctor.json"
    custom.parent.mkdir()
    custom.write_text(json.dumps({"verbose": True}), encoding="utf-8")

    config = load_config(tmp_path, config_path=Path("configs/doctor.json"))
    assert config is not None
    assert config.verbose is True

    with pytest.raises(ValueError, match="does not exist"):
        load_config(tmp_path, config_path=tmp_path / "missing.json")


@pytest.mark.parametrize(
    ("filename", "content", "message"),
    [
        (".vue-doctorrc", "{not json", "Invalid JSON"),
        (".vue-doctorrc", "[1, 2]", "must contain an object"),
        (".vue-doctor.toml", "lint = [", "Invalid TOML"),
        (".vue-doctorrc", '{"lint": "yes"}', "lint must be a boolean"),
        (".vue-doctorrc", '{"ignore": ["a"]}', "ignore must be a table/object"),
        (".vue-doctorrc", '{"ignore": {"rules": [1]}}', "ignore.rules must be a list of strings"),
        (".vue-doctorrc", '{"rules": {"enable": "x"}}', "rules.enable must be a list of strings"),
    ],
)
def test_invalid_config_raises_value_error(
    tmp_path: Path, filename: str, content: str, message: str
) -> None:
    (tmp_path / filename).write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_config(tmp_path)


def test_non_object_package_json_key_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(json.dumps({"vueDoctor": "on"}), encoding="utf-8")
    assert load_config(tmp_path) is None


def test_default_template_is_valid_toml(tmp_path: Path) -> None:
    parsed = tomllib.loads(default_config_template())
    assert parsed["ignore"]["rules"] == ["perf-giant-component"]
    assert parsed["rules"]["disable"] == ["arch-mixed-api-styles"]

    (tmp_path / ".vue-doctor.toml").write_text(default_config_template(), encoding="utf-8")
    config = load_config(tmp_path)
    assert config is not None
    assert config.rule_enable is None
    assert config.to_dict()["rules"] == {"enable": None, "disable": ["arch-mixed-api-styles"]}
