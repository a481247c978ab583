from __future__ import annotations

import typer

from boilerkit.greeting import greet as greet_name


def greet(name: str = typer.Argument("World", help="Name of the person to greet")) -> None:
    """Print a greeting."""
    typer.echo(greet_name(name))
