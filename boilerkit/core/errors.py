"""Error codes for CLI exit status.

Every utility reports success with 0 and any reported failure with 1, whether
the cause is a missing precondition, an I/O error, or a failed external command.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    FAILURE = 1
