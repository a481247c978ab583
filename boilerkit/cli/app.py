from __future__ import annotations

import os
from pathlib import Path

import typer

from boilerkit import __version__
from boilerkit.cli.commands.greet import greet
from boilerkit.cli.commands.notes import notes
from boilerkit.cli.commands.publish import publish
from boilerkit.cli.commands.release import release
from boilerkit.cli.commands.setup import setup
from boilerkit.cli.context import PROJECT_ROOT_ENV
from boilerkit.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(setup)
app.command()(release)
app.command()(notes)
app.command()(publish)
app.command()(greet)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    cwd: Path | None = typer.Option(
        None,
        "--cwd",
        help="Project root (defaults to the current directory)",
    ),
) -> None:
    if cwd is not None:
        try:
            root = cwd.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --cwd: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.FAILURE))

        if not root.is_dir():
            typer.echo(f"error: --cwd '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.FAILURE))

        os.environ[PROJECT_ROOT_ENV] = str(root)


def main() -> None:
    app()
