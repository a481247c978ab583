from __future__ import annotations

import json
import os
import stat
from collections.abc import Iterable
from pathlib import Path

import pytest

from boilerkit.core.config import BUNDLED_TEMPLATES_DIR
from boilerkit.core.result import Err, Ok, Result
from boilerkit.output.console import MockConsole
from boilerkit.platform.process import ProcessError
from boilerkit.services.automation import (
    FEATURE_FILES,
    FEATURE_MANIFEST_ENTRIES,
    FEATURE_PROMPTS,
    AutomationService,
    Feature,
    FeatureSelection,
    ask_features,
    is_affirmative,
)


class ScriptedAsk:
    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.questions: list[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        return self._answers.pop(0)


class FakeRunner:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[list[str]] = []

    def __call__(self, cmd: list[str], cwd: Path) -> Result[None, ProcessError]:
        self.calls.append(cmd)
        if self.returncode != 0:
            return Err(ProcessError(command=tuple(cmd), returncode=self.returncode))
        return Ok(None)


def _write_manifest(root: Path, data: dict[str, object] | None = None) -> Path:
    path = root / "package.json"
    payload = data if data is not None else {"name": "demo", "version": "1.0.0"}
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def _read_manifest(root: Path) -> dict[str, object]:
    return json.loads((root / "package.json").read_text(encoding="utf-8"))


def _service(
    root: Path,
    answers: Iterable[str],
    *,
    runner: FakeRunner | None = None,
    console: MockConsole | None = None,
) -> AutomationService:
    return AutomationService(
        project_root=root,
        console=console or MockConsole(),
        ask=ScriptedAsk(answers),
        runner=runner or FakeRunner(),
        templates_root=BUNDLED_TEMPLATES_DIR,
    )


class TestSelection:
    @pytest.mark.parametrize("answer", ["", "y", "Y", "yes", "sure", "maybe"])
    def test_default_is_yes(self, answer: str) -> None:
        assert is_affirmative(answer)

    @pytest.mark.parametrize("answer", ["n", "N", "no", " n "])
    def test_explicit_negative(self, answer: str) -> None:
        assert not is_affirmative(answer)

    def test_asks_each_feature_once_in_order(self) -> None:
        ask = ScriptedAsk(["", "n", "y", "no"])

        selection = ask_features(ask)

        assert ask.questions == [FEATURE_PROMPTS[f] for f in Feature]
        assert selection.enabled() == [Feature.FORMATTING, Feature.VERSIONING]


class TestPrecondition:
    def test_missing_manifest_fails_before_prompting(self, tmp_path: Path) -> None:
        ask = ScriptedAsk([])
        service = AutomationService(
            project_root=tmp_path,
            console=MockConsole(),
            ask=ask,
            runner=FakeRunner(),
        )

        result = service.run()

        assert isinstance(result, Err)
        assert result.error.kind == "manifest_missing"
        assert ask.questions == []
        assert list(tmp_path.iterdir()) == []

    def test_invalid_manifest(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{", encoding="utf-8")

        result = _service(tmp_path, []).run()

        assert isinstance(result, Err)
        assert result.error.kind == "manifest_invalid"


class TestInstall:
    def test_all_features(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)
        runner = FakeRunner()
        console = MockConsole()

        result = _service(tmp_path, ["", "", "", ""], runner=runner, console=console).run()

        assert isinstance(result, Ok)
        for feature in Feature:
            for entry in FEATURE_FILES[feature]:
                dest = tmp_path / entry.dest
                src = BUNDLED_TEMPLATES_DIR / entry.src
                assert dest.read_bytes() == src.read_bytes()

        data = _read_manifest(tmp_path)
        scripts = data["scripts"]
        deps = data["devDependencies"]
        assert isinstance(scripts, dict) and isinstance(deps, dict)
        assert scripts["format"] == "prettier --write ."
        assert scripts["prepare"] == "husky"
        assert scripts["release:minor"] == "standard-version --release-as minor"
        assert scripts["release"] == "boilerkit release"
        assert scripts["release:notes"] == "boilerkit notes"
        assert scripts["publish:github"] == "boilerkit publish"
        assert set(deps) == {
            "prettier",
            "husky",
            "@commitlint/cli",
            "@commitlint/config-conventional",
            "standard-version",
        }
        assert data["name"] == "demo"
        assert runner.calls == [["npx", "husky", "init"]]
        assert console.find("- GitHub Actions workflows for automated CI and releases")

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_release_script_is_executable(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)

        _service(tmp_path, ["n", "n", "y", "n"]).run()

        mode = stat.S_IMODE((tmp_path / "scripts" / "release.py").stat().st_mode)
        assert mode == 0o755

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_manifest_keeps_its_permissions(self, tmp_path: Path) -> None:
        manifest = _write_manifest(tmp_path)
        manifest.chmod(0o644)

        result = _service(tmp_path, ["y", "n", "y", "n"]).run()

        assert isinstance(result, Ok)
        assert result.value.manifest_added
        assert stat.S_IMODE(manifest.stat().st_mode) == 0o644

    def test_release_launcher_runs_installed_cli(self) -> None:
        text = (BUNDLED_TEMPLATES_DIR / "scripts" / "release.py").read_text(encoding="utf-8")

        assert "import boilerkit" not in text
        assert "from boilerkit" not in text
        assert '"boilerkit", "release"' in text

    def test_disabled_features_leave_no_trace(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)
        runner = FakeRunner()

        result = _service(tmp_path, ["n", "n", "n", "y"], runner=runner).run()

        assert isinstance(result, Ok)
        for feature in (Feature.FORMATTING, Feature.COMMIT_HOOKS, Feature.VERSIONING):
            for entry in FEATURE_FILES[feature]:
                assert not (tmp_path / entry.dest).exists()
        assert (tmp_path / ".github" / "workflows" / "ci.yml").is_file()
        # CI never touches the manifest.
        assert _read_manifest(tmp_path) == {"name": "demo", "version": "1.0.0"}
        assert runner.calls == []
        assert result.value.manifest_added == ()

    def test_scripts_dir_always_created(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)

        _service(tmp_path, ["n", "n", "n", "n"]).run()

        assert (tmp_path / "scripts").is_dir()

    def test_existing_keys_are_not_overwritten(self, tmp_path: Path) -> None:
        _write_manifest(
            tmp_path,
            {
                "name": "demo",
                "scripts": {"format": "biome format --write .", "release": "custom"},
                "devDependencies": {"prettier": "2.8.8"},
            },
        )

        result = _service(tmp_path, ["", "n", "", "n"]).run()

        assert isinstance(result, Ok)
        data = _read_manifest(tmp_path)
        scripts = data["scripts"]
        deps = data["devDependencies"]
        assert isinstance(scripts, dict) and isinstance(deps, dict)
        assert scripts["format"] == "biome format --write ."
        assert scripts["release"] == "custom"
        assert deps["prettier"] == "2.8.8"
        assert "devDependencies.prettier" not in result.value.manifest_added
        assert "scripts.release:patch" in result.value.manifest_added

    def test_rerun_is_idempotent(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)
        answers = ["", "", "n", ""]

        _service(tmp_path, answers).run()
        first = (tmp_path / "package.json").read_text(encoding="utf-8")
        second_run = _service(tmp_path, answers).run()
        second = (tmp_path / "package.json").read_text(encoding="utf-8")

        assert first == second
        assert isinstance(second_run, Ok)
        assert second_run.value.manifest_added == ()

    def test_every_block_merges_its_entries_once(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)

        result = _service(tmp_path, ["", "", "", ""]).run()

        assert isinstance(result, Ok)
        expected = [
            f"{section}.{key}"
            for feature in Feature
            for section, key, _ in FEATURE_MANIFEST_ENTRIES[feature]
        ]
        assert list(result.value.manifest_added) == expected

    def test_hook_init_failure(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)

        result = _service(tmp_path, ["y", "y", "y", "y"], runner=FakeRunner(returncode=1)).run()

        assert isinstance(result, Err)
        assert result.error.kind == "hook_init_failed"
        # Earlier steps are not rolled back; versioning never ran.
        data = _read_manifest(tmp_path)
        scripts = data["scripts"]
        assert isinstance(scripts, dict)
        assert "prepare" in scripts
        assert "release" not in scripts

    def test_missing_template_is_copy_error(self, tmp_path: Path) -> None:
        project = tmp_path / "project"
        project.mkdir()
        _write_manifest(project)
        service = AutomationService(
            project_root=project,
            console=MockConsole(),
            ask=ScriptedAsk(["", "n", "n", "n"]),
            runner=FakeRunner(),
            templates_root=tmp_path / "empty-templates",
        )

        result = service.run()

        assert isinstance(result, Err)
        assert result.error.kind == "copy_failed"
        assert ".prettierrc" in result.error.message

    def test_install_with_explicit_selection(self, tmp_path: Path) -> None:
        from boilerkit.services.manifest import load_manifest

        _write_manifest(tmp_path)
        loaded = load_manifest(tmp_path)
        assert isinstance(loaded, Ok)

        result = _service(tmp_path, []).install(
            loaded.value,
            FeatureSelection({Feature.FORMATTING: True}),
        )

        assert isinstance(result, Ok)
        assert result.value.copied == (".prettierrc",)
