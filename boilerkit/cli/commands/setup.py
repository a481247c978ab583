from __future__ import annotations

import typer

from boilerkit.cli.context import build_context
from boilerkit.core.errors import ErrorCode
from boilerkit.core.result import Err, Ok
from boilerkit.output.console import Style
from boilerkit.services.automation import AutomationService


def _prompt(question: str) -> str:
    return typer.prompt(question.rstrip(), default="", show_default=False, prompt_suffix=" ")


def setup(
    yes: bool = typer.Option(False, "--yes", "-y", help="Enable every feature (do not prompt)"),
) -> None:
    """Set up automation in an existing Node.js project.

    Asks which features to install (Prettier, Husky hooks, version bumping,
    GitHub Actions), copies their files and adds missing package.json entries.
    """
    ctx = build_context()
    service = AutomationService(
        project_root=ctx.project_root,
        console=ctx.console,
        ask=(lambda _q: "") if yes else _prompt,
        templates_root=ctx.config.templates.resolve_root(ctx.project_root),
    )

    match service.run():
        case Ok(_):
            pass
        case Err(e):
            ctx.console.error(f"setup failed: {e.message}")
            if e.hint:
                ctx.console.print(f"hint: {e.hint}", Style.DIM)
            raise typer.Exit(code=int(ErrorCode.FAILURE))
