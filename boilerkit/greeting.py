"""Placeholder library entry point."""

from __future__ import annotations

__all__ = ["greet"]


def greet(name: str) -> str:
    """Greet a person.

    Args:
        name: Name of the person to greet.

    Returns:
        Greeting message.
    """
    return f"Hello, {name}!"
