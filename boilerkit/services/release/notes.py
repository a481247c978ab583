from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from boilerkit.core.config import ReleaseConfig
from boilerkit.core.result import Err, Ok, Result
from boilerkit.output.console import ConsoleProtocol, Style
from boilerkit.platform.files import atomic_write_text
from boilerkit.services.manifest import load_manifest
from boilerkit.services.release.errors import NotesError

UNKNOWN_VERSION = "0.0.0"

# A heading ("## ") followed by a bracketed semver, up to the next heading whose
# bracket starts with a digit, or end of input.
_LATEST_SECTION_RE = re.compile(
    r"(#+\s\[[0-9]+\.[0-9]+\.[0-9]+\].*?(?=#+\s\[[0-9]+|$))",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class ExtractedNotes:
    path: Path
    content: str
    version: str
    fallback: bool


def extract_latest_release(changelog: str) -> str | None:
    """Return the first versioned section of a changelog, trimmed.

    Returns None when no heading like ``## [1.2.3]`` is present.
    """
    m = _LATEST_SECTION_RE.search(changelog)
    if m is None:
        return None
    section = m.group(1).strip()
    return section or None


def fallback_notes(version: str) -> str:
    return f"# v{version}\n\nRelease version {version}"


def read_project_version(project_root: Path) -> str:
    loaded = load_manifest(project_root)
    if isinstance(loaded, Err):
        return UNKNOWN_VERSION
    return loaded.value.version or UNKNOWN_VERSION


class NotesService:
    def __init__(
        self,
        *,
        project_root: Path,
        config: ReleaseConfig,
        console: ConsoleProtocol,
    ) -> None:
        self._root = project_root
        self._config = config
        self._console = console

    @property
    def changelog_path(self) -> Path:
        return self._root / self._config.changelog

    @property
    def output_path(self) -> Path:
        return self._root / self._config.output

    def extract(self) -> Result[ExtractedNotes, NotesError]:
        version = read_project_version(self._root)

        try:
            changelog = self.changelog_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._console.error(f"failed to read {self._config.changelog}: {e}")
            self._write_fallback(version)
            return Err(
                NotesError(
                    kind="changelog_unreadable",
                    message=f"could not extract release notes from {self._config.changelog}",
                    hint=str(self.changelog_path),
                )
            )

        section = extract_latest_release(changelog)
        if section is None:
            self._console.warning("Could not extract latest release notes. Using default message.")
            content = fallback_notes(version)
        else:
            content = section

        try:
            atomic_write_text(self.output_path, content)
        except OSError as e:
            self._console.error(f"failed to write {self._config.output}: {e}")
            self._write_fallback(version)
            return Err(
                NotesError(
                    kind="output_unwritable",
                    message=f"could not write release notes to {self._config.output}",
                    hint=str(self.output_path),
                )
            )

        if section is not None:
            self._console.success("Successfully extracted latest release notes.")
        return Ok(
            ExtractedNotes(
                path=self.output_path,
                content=content,
                version=version,
                fallback=section is None,
            )
        )

    def _write_fallback(self, version: str) -> None:
        try:
            atomic_write_text(self.output_path, fallback_notes(version))
        except OSError as e:
            self._console.print(f"fallback notes not written: {e}", Style.DIM)
            return
        self._console.print(f"wrote fallback notes to {self._config.output}", Style.DIM)
