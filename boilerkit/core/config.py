"""Typed configuration loading and access.

Configuration is optional: a ``boilerkit.toml`` in the project root can
override where release notes are read from and written to, and where the
installer takes its template files from.

    [release]
    changelog = "CHANGELOG.md"
    output = "LATEST_RELEASE.md"

    [templates]
    root = "~/my-templates"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CHANGELOG",
    "DEFAULT_RELEASE_OUTPUT",
    "BUNDLED_TEMPLATES_DIR",
    "Config",
    "ConfigError",
    "ReleaseConfig",
    "TemplatesConfig",
    "load_config",
]

CONFIG_FILENAME = "boilerkit.toml"
DEFAULT_CHANGELOG = "CHANGELOG.md"
DEFAULT_RELEASE_OUTPUT = "LATEST_RELEASE.md"
BUNDLED_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Changelog input and release-notes output, relative to the project root."""

    changelog: str = DEFAULT_CHANGELOG
    output: str = DEFAULT_RELEASE_OUTPUT


@dataclass(frozen=True, slots=True)
class TemplatesConfig:
    """Where provisioned files are copied from."""

    root: str | None = None

    def resolve_root(self, base: Path) -> Path:
        if self.root is None:
            return BUNDLED_TEMPLATES_DIR
        path = Path(self.root).expanduser()
        if not path.is_absolute():
            path = base / path
        return path


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}
        templates: StrDict = get_table(data, "templates") or {}

        return cls(
            release=ReleaseConfig(
                changelog=get_str(release, "changelog") or DEFAULT_CHANGELOG,
                output=get_str(release, "output") or DEFAULT_RELEASE_OUTPUT,
            ),
            templates=TemplatesConfig(root=get_str(templates, "root")),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to boilerkit.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
