from __future__ import annotations

import typer

from boilerkit.cli.commands._helpers import exit_on_error
from boilerkit.cli.context import CLIContext, build_context
from boilerkit.output.console import Style
from boilerkit.services.release.semver import ReleaseType, SemVer, resolve_release_type
from boilerkit.services.release.service import ReleaseService

_CHOICES: tuple[tuple[str, ReleaseType, str], ...] = (
    ("0 or p", "patch", "for bug fixes"),
    ("1 or m", "minor", "for new features"),
    ("2 or M", "major", "for breaking changes"),
)
_EXAMPLE_VERSION = SemVer(1, 0, 0)


def release() -> None:
    """Create a new release with standard-version.

    Prompts for the release type (patch, minor, major) and bumps the version,
    updates CHANGELOG.md and tags the commit.
    """
    ctx = build_context()
    service = ReleaseService(project_root=ctx.project_root, console=ctx.console)

    _print_banner(ctx, service.current_version())
    answer = typer.prompt(
        "Select release type [0/1/2 or p/m/M] (default: 0=patch)",
        default="",
        show_default=False,
    )
    release_type = resolve_release_type(answer)

    ctx.console.newline()
    ctx.console.info(f"Creating {release_type} release...")
    exit_on_error(service.release(release_type), ctx)

    ctx.console.newline()
    ctx.console.success("Release created successfully!")
    ctx.console.header("Next steps")
    ctx.console.print("1. Push the changes: git push --follow-tags origin main")
    ctx.console.print("2. Create a GitHub release: npm run publish:github")


def _print_banner(ctx: CLIContext, current: SemVer | None) -> None:
    version = current or _EXAMPLE_VERSION
    console = ctx.console
    console.header("TypeScript Boilerplate Release Script")
    console.print("This will create a new release using standard-version.", Style.DIM)
    console.print(
        "The release type determines which part of the version number will be incremented:",
        Style.DIM,
    )
    for keys, kind, purpose in _CHOICES:
        console.print(f"- {keys}: {kind}: {version} -> {version.bump(kind)} ({purpose})")
