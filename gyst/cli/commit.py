"""CLI command for committing with a generated message."""

from typing import Optional

import typer

from gyst.cli.utils import finish, load_config_or_exit
from gyst.workflow import CommitWorkflow


def commit_command(
    quick: bool = typer.Option(
        False,
        "--quick",
        "-q",
        help="Commit the generated message without asking",
    ),
    push: bool = typer.Option(
        False,
        "--push",
        help="Push the current branch after committing",
    ),
    max_diff_size: Optional[int] = typer.Option(
        None,
        "--max-diff-size",
        min=1,
        help="Maximum number of diff lines sent to the AI",
    ),
) -> None:
    """Generate a commit message for the staged changes and commit."""
    config = load_config_or_exit(max_diff_size=max_diff_size)
    result = CommitWorkflow(config, quick=quick, push=push).run()
    finish(result)
