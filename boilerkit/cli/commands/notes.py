from __future__ import annotations

from boilerkit.cli.commands._helpers import exit_on_error
from boilerkit.cli.context import build_context
from boilerkit.services.release.notes import NotesService


def notes() -> None:
    """Extract the latest CHANGELOG.md section into LATEST_RELEASE.md."""
    ctx = build_context()
    service = NotesService(
        project_root=ctx.project_root,
        config=ctx.config.release,
        console=ctx.console,
    )
    exit_on_error(service.extract(), ctx)
