"""Typed access to a target project's package.json.

The manifest is read once, mutated in memory through ``merge_if_absent``
and written back whole. Keys we don't know about pass through untouched and
keep their original order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from boilerkit.core.result import Err, Ok, Result
from boilerkit.core.structured import StrDict, as_str_dict, get_str
from boilerkit.platform.files import atomic_write_text

__all__ = [
    "MANIFEST_FILENAME",
    "ManifestError",
    "ManifestSection",
    "ProjectManifest",
    "load_manifest",
]

MANIFEST_FILENAME = "package.json"

type ManifestSection = Literal["scripts", "devDependencies"]

_SECTIONS: tuple[ManifestSection, ...] = ("scripts", "devDependencies")


@dataclass(frozen=True, slots=True)
class ManifestError:
    kind: Literal["manifest_missing", "manifest_invalid", "write_failed"]
    message: str
    hint: str | None = None


class ProjectManifest:
    def __init__(self, path: Path, data: StrDict) -> None:
        self._path = path
        self._data = data

    @property
    def path(self) -> Path:
        return self._path

    @property
    def data(self) -> StrDict:
        return self._data

    @property
    def version(self) -> str | None:
        return get_str(self._data, "version")

    def merge_if_absent(self, name: ManifestSection, key: str, value: str) -> bool:
        """Add ``key`` to the section unless it is already there.

        Returns True if the manifest changed. Existing values are never replaced,
        so the final state doesn't depend on the order merges are applied in.
        """
        table = as_str_dict(self._data.get(name))
        if table is None:
            table = {}
            self._data[name] = table
        if key in table:
            return False
        table[key] = value
        return True

    def to_json(self) -> str:
        return json.dumps(self._data, indent=2, ensure_ascii=False) + "\n"

    def save(self) -> Result[None, ManifestError]:
        try:
            atomic_write_text(self._path, self.to_json())
        except OSError as e:
            return Err(
                ManifestError(
                    kind="write_failed",
                    message=f"failed to write {self._path.name}: {e}",
                    hint=str(self._path),
                )
            )
        return Ok(None)


def load_manifest(project_root: Path) -> Result[ProjectManifest, ManifestError]:
    path = project_root / MANIFEST_FILENAME
    if not path.is_file():
        return Err(
            ManifestError(
                kind="manifest_missing",
                message=f"{MANIFEST_FILENAME} not found. Please run this in a Node.js project.",
                hint=str(project_root),
            )
        )

    try:
        obj: object = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        return Err(
            ManifestError(
                kind="manifest_invalid",
                message=f"failed to read {MANIFEST_FILENAME}: {e}",
                hint=str(path),
            )
        )
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(
            ManifestError(
                kind="manifest_invalid",
                message=f"invalid JSON in {MANIFEST_FILENAME}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ManifestError(
                kind="manifest_invalid",
                message=f"{MANIFEST_FILENAME} root must be a JSON object",
                hint=str(path),
            )
        )

    for name in _SECTIONS:
        if name in data and as_str_dict(data[name]) is None:
            return Err(
                ManifestError(
                    kind="manifest_invalid",
                    message=f"'{name}' in {MANIFEST_FILENAME} must be an object",
                    hint=str(path),
                )
            )

    return Ok(ProjectManifest(path, data))
