from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class NotesError:
    kind: Literal["changelog_unreadable", "output_unwritable"]
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: Literal[
        "bump_failed",
        "gh_missing",
        "notes_failed",
        "publish_failed",
    ]
    message: str
    hint: str | None = None
