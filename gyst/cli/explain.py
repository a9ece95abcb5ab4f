"""CLI command for turning a task description into git commands."""

from typing import List

import typer

from gyst import llm
from gyst.cli.utils import load_config_or_exit
from gyst.llm import LLMError
from gyst.llm.parsing import CommandSuggestion


def _render(suggestion: CommandSuggestion) -> None:
    if suggestion.intro:
        typer.echo(suggestion.intro)
        typer.echo()

    for step in suggestion.steps:
        typer.echo(typer.style(f"  $ {step.command}", bold=True))
        if step.explanation:
            typer.echo(f"    {step.explanation}")
        if step.important_note:
            typer.echo(typer.style(f"    ! {step.important_note}", fg=typer.colors.YELLOW))
        typer.echo()

    if suggestion.important_tip:
        typer.echo(typer.style(f"Tip: {suggestion.important_tip}", fg=typer.colors.YELLOW))


def explain_command(
    description: List[str] = typer.Argument(
        ...,
        help="What you want to do, e.g. 'undo my last commit but keep the changes'",
    ),
) -> None:
    """Suggest the git command(s) for a task described in plain words."""
    config = load_config_or_exit()
    try:
        provider = llm.get_provider(config)
        typer.echo("Thinking...", err=True)
        suggestion = llm.explain_command(" ".join(description), provider)
    except LLMError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _render(suggestion)
