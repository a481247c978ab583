"""Subprocess execution with Result-based error handling.

External collaborators (husky, standard-version, gh) are always invoked
as argv lists, never through a shell, and stream their output straight to
the terminal.

Usage:
    result = run_silent(["npx", "husky", "init"], cwd=project_root)
    match result:
        case Ok(_):
            console.success("hooks initialized")
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from boilerkit.core.result import Err, Ok, Result

__all__ = ["CommandRunner", "ProcessError", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never started).
        stderr: Error details when the process could not be started.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.returncode == -1 and self.stderr:
            return f"{cmd_str} failed to start: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"


type CommandRunner = Callable[[list[str], Path], Result[None, ProcessError]]


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command without capturing output.

    Output streams to the terminal. Blocks until the command exits.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)
