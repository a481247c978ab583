"""Result type for explicit error handling.

Services return ``Ok`` or ``Err`` instead of raising, so every caller decides
what a failure means for the current invocation (usually: report and exit 1).

Usage:
    def read_version(manifest: ProjectManifest) -> Result[str, str]:
        if manifest.version is None:
            return Err("package.json has no version")
        return Ok(manifest.version)

    match read_version(manifest):
        case Ok(version):
            console.print(f"version: {version}")
        case Err(error):
            console.error(error)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Represents a successful result containing a value.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Represents a failed result containing an error.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
