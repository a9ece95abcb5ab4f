"""CLI command for choosing among several generated messages."""

import typer

from gyst.cli.utils import finish, load_config_or_exit
from gyst.workflow import DEFAULT_SUGGESTION_COUNT, SuggestionWorkflow


def suggest_command(
    count: int = typer.Option(
        DEFAULT_SUGGESTION_COUNT,
        "--count",
        "-c",
        min=1,
        max=10,
        help="Number of alternative messages to generate",
    ),
    push: bool = typer.Option(
        False,
        "--push",
        help="Push the current branch after committing",
    ),
) -> None:
    """Generate several commit messages and commit the one you pick."""
    config = load_config_or_exit()
    result = SuggestionWorkflow(config, count=count, push=push).run()
    finish(result)
