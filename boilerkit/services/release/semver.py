from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

type ReleaseType = Literal["patch", "minor", "major"]

_VERSION_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")

# "M" is the only case-sensitive answer; everything else is lowercased first.
_ANSWERS: dict[str, ReleaseType] = {
    "0": "patch",
    "p": "patch",
    "patch": "patch",
    "1": "minor",
    "m": "minor",
    "minor": "minor",
    "2": "major",
    "major": "major",
}


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump(self, kind: ReleaseType) -> "SemVer":
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected release type: {kind}")


def parse_version(text: str) -> SemVer | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def resolve_release_type(answer: str) -> ReleaseType:
    """Map a prompt answer to a release type; unknown or empty means patch."""
    raw = answer.strip()
    if raw == "M":
        return "major"
    return _ANSWERS.get(raw.lower(), "patch")
