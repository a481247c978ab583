"""Platform abstraction layer."""

from .files import atomic_write_text, copy_file, make_executable
from .process import CommandRunner, ProcessError, run_silent

__all__ = [
    # files
    "atomic_write_text",
    "copy_file",
    "make_executable",
    # process
    "CommandRunner",
    "ProcessError",
    "run_silent",
]
