"""Install project automation (formatting, commit hooks, versioning, CI) into a project.

The flow mirrors a one-time setup script: ask once per feature, copy the
feature's template files into the project, then fill in missing
package.json entries. Everything is additive, so re-running with the same
answers leaves the manifest unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

from boilerkit.core.config import BUNDLED_TEMPLATES_DIR
from boilerkit.core.result import Err, Ok, Result
from boilerkit.output.console import ConsoleProtocol, Style
from boilerkit.platform.files import copy_file, make_executable
from boilerkit.platform.process import CommandRunner, run_silent
from boilerkit.services.manifest import ManifestSection, ProjectManifest, load_manifest

# -----------------------------------------------------------------------------
# Feature table
# -----------------------------------------------------------------------------


class Feature(str, Enum):
    """Optional automation features, in prompt order."""

    FORMATTING = "formatting"
    COMMIT_HOOKS = "commit_hooks"
    VERSIONING = "versioning"
    CI = "ci"


@dataclass(frozen=True, slots=True)
class FileEntry:
    src: str
    dest: str


FEATURE_FILES: dict[Feature, tuple[FileEntry, ...]] = {
    Feature.FORMATTING: (FileEntry(".prettierrc", ".prettierrc"),),
    Feature.COMMIT_HOOKS: (
        FileEntry("commitlint.config.js", "commitlint.config.js"),
        FileEntry(".husky/pre-commit", ".husky/pre-commit"),
    ),
    Feature.VERSIONING: (
        FileEntry(".versionrc.json", ".versionrc.json"),
        FileEntry("scripts/release.py", "scripts/release.py"),
    ),
    Feature.CI: (
        FileEntry(".github/workflows/ci.yml", ".github/workflows/ci.yml"),
        FileEntry(".github/workflows/release.yml", ".github/workflows/release.yml"),
    ),
}

FEATURE_PROMPTS: dict[Feature, str] = {
    Feature.FORMATTING: "Setup Prettier code formatting? (Y/n): ",
    Feature.COMMIT_HOOKS: "Setup Husky pre-commit hooks? (Y/n): ",
    Feature.VERSIONING: "Setup conventional version bumping? (Y/n): ",
    Feature.CI: "Setup GitHub Actions workflows? (Y/n): ",
}

FEATURE_SUMMARIES: dict[Feature, str] = {
    Feature.FORMATTING: "Prettier for code formatting",
    Feature.COMMIT_HOOKS: "Husky pre-commit hooks for commit message linting",
    Feature.VERSIONING: "Conventional version bumping with standard-version",
    Feature.CI: "GitHub Actions workflows for automated CI and releases",
}

# Manifest entries per feature, applied in this order. CI has none.
FEATURE_MANIFEST_ENTRIES: dict[Feature, tuple[tuple[ManifestSection, str, str], ...]] = {
    Feature.FORMATTING: (
        ("devDependencies", "prettier", "^3.3.3"),
        ("scripts", "format", "prettier --write ."),
    ),
    Feature.COMMIT_HOOKS: (
        ("devDependencies", "husky", "^9.1.6"),
        ("devDependencies", "@commitlint/cli", "^19.5.0"),
        ("devDependencies", "@commitlint/config-conventional", "^19.5.0"),
        ("scripts", "prepare", "husky"),
    ),
    Feature.VERSIONING: (
        ("devDependencies", "standard-version", "^9.5.0"),
        ("scripts", "release", "boilerkit release"),
        ("scripts", "release:patch", "standard-version --release-as patch"),
        ("scripts", "release:minor", "standard-version --release-as minor"),
        ("scripts", "release:major", "standard-version --release-as major"),
        ("scripts", "release:notes", "boilerkit notes"),
        ("scripts", "publish:github", "boilerkit publish"),
    ),
    Feature.CI: (),
}

HOOK_INIT_COMMAND = ["npx", "husky", "init"]
RELEASE_SCRIPT = "scripts/release.py"

_NEGATIVE_ANSWERS = frozenset({"n", "no"})


# -----------------------------------------------------------------------------
# Selection
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FeatureSelection:
    flags: Mapping[Feature, bool]

    def is_enabled(self, feature: Feature) -> bool:
        return self.flags.get(feature, False)

    def enabled(self) -> list[Feature]:
        return [f for f in Feature if self.is_enabled(f)]


def is_affirmative(answer: str) -> bool:
    """Default yes: anything but an explicit "n"/"no" enables the feature."""
    return answer.strip().lower() not in _NEGATIVE_ANSWERS


def ask_features(ask: Callable[[str], str]) -> FeatureSelection:
    """Ask each feature question exactly once, in fixed order."""
    return FeatureSelection({f: is_affirmative(ask(FEATURE_PROMPTS[f])) for f in Feature})


# -----------------------------------------------------------------------------
# Errors / report
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AutomationError:
    kind: Literal[
        "manifest_missing",
        "manifest_invalid",
        "copy_failed",
        "write_failed",
        "hook_init_failed",
    ]
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class SetupReport:
    selection: FeatureSelection
    copied: tuple[str, ...]
    manifest_added: tuple[str, ...]


# -----------------------------------------------------------------------------
# Service
# -----------------------------------------------------------------------------


class AutomationService:
    def __init__(
        self,
        *,
        project_root: Path,
        console: ConsoleProtocol,
        ask: Callable[[str], str],
        runner: CommandRunner = run_silent,
        templates_root: Path = BUNDLED_TEMPLATES_DIR,
    ) -> None:
        self._root = project_root
        self._console = console
        self._ask = ask
        self._runner = runner
        self._templates = templates_root

    def run(self) -> Result[SetupReport, AutomationError]:
        """Check the precondition, ask for features, then install them."""
        self._console.print("Setting up TypeScript project automation...")

        loaded = load_manifest(self._root)
        if isinstance(loaded, Err):
            e = loaded.error
            kind: Literal["manifest_missing", "manifest_invalid"] = (
                "manifest_missing" if e.kind == "manifest_missing" else "manifest_invalid"
            )
            return Err(AutomationError(kind=kind, message=e.message, hint=e.hint))

        selection = ask_features(self._ask)
        return self.install(loaded.value, selection)

    def install(
        self,
        manifest: ProjectManifest,
        selection: FeatureSelection,
    ) -> Result[SetupReport, AutomationError]:
        """Provision files and update the manifest for every enabled feature.

        Side effects from earlier steps are kept if a later step fails.
        """
        try:
            (self._root / "scripts").mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(
                AutomationError(
                    kind="copy_failed",
                    message=f"failed to create scripts/: {e}",
                    hint=str(self._root),
                )
            )

        copied = self._provision(selection)
        if isinstance(copied, Err):
            return copied

        added: list[str] = []
        for feature in (Feature.FORMATTING, Feature.COMMIT_HOOKS, Feature.VERSIONING):
            if not selection.is_enabled(feature):
                continue
            if feature == Feature.VERSIONING:
                chmod = self._mark_release_script_executable()
                if isinstance(chmod, Err):
                    return chmod

            changed = self._merge_entries(manifest, feature)
            if changed:
                saved = manifest.save()
                if isinstance(saved, Err):
                    return Err(
                        AutomationError(
                            kind="write_failed",
                            message=saved.error.message,
                            hint=saved.error.hint,
                        )
                    )
                self._console.print(
                    f"Added {', '.join(changed)} to package.json",
                    Style.DIM,
                )
                added.extend(changed)

            if feature == Feature.COMMIT_HOOKS:
                hooks = self._init_hooks()
                if isinstance(hooks, Err):
                    return hooks

        self._print_summary(selection, added)
        return Ok(
            SetupReport(
                selection=selection,
                copied=tuple(copied.value),
                manifest_added=tuple(added),
            )
        )

    def _provision(self, selection: FeatureSelection) -> Result[list[str], AutomationError]:
        copied: list[str] = []
        for feature in selection.enabled():
            for entry in FEATURE_FILES[feature]:
                src = self._templates / entry.src
                dest = self._root / entry.dest
                try:
                    copy_file(src, dest)
                except OSError as e:
                    return Err(
                        AutomationError(
                            kind="copy_failed",
                            message=f"failed to copy {entry.src} to {entry.dest}: {e}",
                            hint=str(src),
                        )
                    )
                self._console.print(f"Copied {entry.src} to {entry.dest}")
                copied.append(entry.dest)
        return Ok(copied)

    def _merge_entries(self, manifest: ProjectManifest, feature: Feature) -> list[str]:
        changed: list[str] = []
        for section, key, value in FEATURE_MANIFEST_ENTRIES[feature]:
            if manifest.merge_if_absent(section, key, value):
                changed.append(f"{section}.{key}")
        return changed

    def _mark_release_script_executable(self) -> Result[None, AutomationError]:
        path = self._root / RELEASE_SCRIPT
        try:
            make_executable(path)
        except OSError as e:
            return Err(
                AutomationError(
                    kind="copy_failed",
                    message=f"failed to make {RELEASE_SCRIPT} executable: {e}",
                    hint=str(path),
                )
            )
        return Ok(None)

    def _init_hooks(self) -> Result[None, AutomationError]:
        self._console.print("Setting up husky...")
        self._console.print(" ".join(HOOK_INIT_COMMAND), Style.DIM)
        result = self._runner(HOOK_INIT_COMMAND, self._root)
        if isinstance(result, Err):
            return Err(
                AutomationError(
                    kind="hook_init_failed",
                    message=str(result.error),
                    hint="install dependencies first: npm install",
                )
            )
        return Ok(None)

    def _print_summary(self, selection: FeatureSelection, added: list[str]) -> None:
        self._console.newline()
        self._console.success("Setup complete! The following features were installed:")
        for feature in selection.enabled():
            self._console.print(f"- {FEATURE_SUMMARIES[feature]}")
        if any(key.startswith("devDependencies.") for key in added):
            self._console.newline()
            self._console.info("run `npm install` to install the added devDependencies")
