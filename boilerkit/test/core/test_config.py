"""Tests for boilerkit.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from boilerkit.core.config import (
    BUNDLED_TEMPLATES_DIR,
    Config,
    ReleaseConfig,
    TemplatesConfig,
    load_config,
)
from boilerkit.core.result import Err, Ok


class TestDefaults:
    def test_release_defaults(self) -> None:
        config = ReleaseConfig()
        assert config.changelog == "CHANGELOG.md"
        assert config.output == "LATEST_RELEASE.md"

    def test_templates_default_to_bundled(self, tmp_path: Path) -> None:
        assert TemplatesConfig().resolve_root(tmp_path) == BUNDLED_TEMPLATES_DIR

    def test_bundled_templates_exist(self) -> None:
        assert (BUNDLED_TEMPLATES_DIR / ".prettierrc").is_file()
        assert (BUNDLED_TEMPLATES_DIR / "scripts" / "release.py").is_file()

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.release = ReleaseConfig()  # type: ignore[misc]


class TestFromDict:
    def test_empty(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_overrides(self) -> None:
        config = Config.from_dict(
            {
                "release": {"changelog": "docs/CHANGES.md", "output": "notes.md"},
                "templates": {"root": "tpl"},
            }
        )
        assert config.release.changelog == "docs/CHANGES.md"
        assert config.release.output == "notes.md"
        assert config.templates.root == "tpl"

    def test_blank_values_fall_back(self) -> None:
        config = Config.from_dict({"release": {"changelog": "  ", "output": 3}})
        assert config.release == ReleaseConfig()

    def test_relative_template_root_resolves_against_project(self, tmp_path: Path) -> None:
        config = Config.from_dict({"templates": {"root": "tpl"}})
        assert config.templates.resolve_root(tmp_path) == tmp_path / "tpl"


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "boilerkit.toml"
        path.write_text('[release]\noutput = "RELEASE.md"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.release.output == "RELEASE.md"
        assert result.value.release.changelog == "CHANGELOG.md"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "boilerkit.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "boilerkit.toml"
        path.write_text("[release\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_unreadable_path_is_error(self, tmp_path: Path) -> None:
        path = tmp_path / "boilerkit.toml"
        path.mkdir()

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Error reading config" in result.error.message
        assert result.error.path == path
