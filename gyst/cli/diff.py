"""CLI command for previewing what would be sent for generation."""

from typing import Optional

import typer

from gyst.cli.utils import colorize_diff, load_config_or_exit
from gyst.git import GitError, NoStagedChangesError, collect
from gyst.llm.prompts import format_changes


def diff_command(
    max_diff_size: Optional[int] = typer.Option(
        None,
        "--max-diff-size",
        min=1,
        help="Maximum number of diff lines to show",
    ),
    stat: bool = typer.Option(
        False,
        "--stat",
        help="Show only the change summary",
    ),
) -> None:
    """Show the staged change set and the bounded diff."""
    config = load_config_or_exit(max_diff_size=max_diff_size)

    try:
        changes, diff = collect(
            max_diff_size=config.max_diff_size,
            rename_threshold=config.rename_threshold,
        )
    except NoStagedChangesError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(format_changes(changes))
    if stat:
        return

    typer.echo()
    typer.echo(colorize_diff(diff.text))
    if diff.truncated:
        typer.echo()
        typer.echo(
            f"Diff truncated: {diff.content_lines} of {diff.total_lines} lines shown "
            f"(limit {config.max_diff_size}).",
            err=True,
        )
