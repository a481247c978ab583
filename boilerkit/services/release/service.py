from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

from boilerkit.core.result import Err, Ok, Result
from boilerkit.output.console import ConsoleProtocol, Style
from boilerkit.platform.process import CommandRunner, run_silent
from boilerkit.services.manifest import load_manifest
from boilerkit.services.release.errors import ReleaseError
from boilerkit.services.release.notes import NotesService
from boilerkit.services.release.semver import ReleaseType, SemVer, parse_version


def bump_command(release_type: ReleaseType) -> list[str]:
    return ["npx", "standard-version", "--release-as", release_type]


def publish_command(tag: str, notes_file: Path) -> list[str]:
    return ["gh", "release", "create", tag, "-F", str(notes_file)]


class ReleaseService:
    def __init__(
        self,
        *,
        project_root: Path,
        console: ConsoleProtocol,
        runner: CommandRunner = run_silent,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._root = project_root
        self._console = console
        self._runner = runner
        self._which = which

    def current_version(self) -> SemVer | None:
        loaded = load_manifest(self._root)
        if isinstance(loaded, Err) or loaded.value.version is None:
            return None
        return parse_version(loaded.value.version)

    def release(self, release_type: ReleaseType) -> Result[None, ReleaseError]:
        """Delegate the version bump to standard-version (blocking)."""
        cmd = bump_command(release_type)
        self._console.print(" ".join(cmd), Style.DIM)

        result = self._runner(cmd, self._root)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="bump_failed",
                    message=f"Error creating release: {result.error}",
                    hint="check the standard-version output above",
                )
            )
        return Ok(None)

    def publish(self, notes: NotesService) -> Result[str, ReleaseError]:
        """Extract release notes and create a GitHub release for the current version."""
        loaded = load_manifest(self._root)
        if isinstance(loaded, Err):
            return Err(ReleaseError(kind="publish_failed", message=loaded.error.message))
        version = loaded.value.version
        if version is None:
            return Err(
                ReleaseError(
                    kind="publish_failed",
                    message="package.json has no version",
                    hint=str(loaded.value.path),
                )
            )

        extracted = notes.extract()
        if isinstance(extracted, Err):
            return Err(
                ReleaseError(
                    kind="notes_failed",
                    message=extracted.error.message,
                    hint=extracted.error.hint,
                )
            )

        if self._which("gh") is None:
            return Err(
                ReleaseError(
                    kind="gh_missing",
                    message="gh: missing",
                    hint="Install GitHub CLI: https://cli.github.com/",
                )
            )

        tag = f"v{version}"
        cmd = publish_command(tag, extracted.value.path)
        self._console.print(" ".join(cmd), Style.DIM)

        result = self._runner(cmd, self._root)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="publish_failed",
                    message=f"failed to create GitHub release {tag}: {result.error}",
                    hint="run: gh auth status",
                )
            )
        return Ok(tag)
