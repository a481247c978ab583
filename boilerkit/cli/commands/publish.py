from __future__ import annotations

from boilerkit.cli.commands._helpers import exit_on_error
from boilerkit.cli.context import build_context
from boilerkit.core.result import Ok
from boilerkit.services.release.notes import NotesService
from boilerkit.services.release.service import ReleaseService


def publish() -> None:
    """Create a GitHub release for the current version using the latest notes."""
    ctx = build_context()
    notes = NotesService(
        project_root=ctx.project_root,
        config=ctx.config.release,
        console=ctx.console,
    )
    result = ReleaseService(project_root=ctx.project_root, console=ctx.console).publish(notes)
    exit_on_error(result, ctx)
    if isinstance(result, Ok):
        ctx.console.success(f"GitHub release {result.value} created")
