"""Root callback: version flag and verbosity."""

from typing import Optional

import typer

from gyst import __version__
from gyst.logging_utils import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gyst {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log output (-v info, -vv debug)",
    ),
) -> None:
    """gyst: AI-written commit messages for your staged changes."""
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)
