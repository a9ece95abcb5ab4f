"""Shared utility functions for CLI commands."""

from typing import Any

import typer

from gyst.config import BackendConfig, load_config
from gyst.global_config import GlobalConfigError
from gyst.llm import AuthError, ConfigError
from gyst.workflow import WorkflowResult, WorkflowState


def load_config_or_exit(**overrides: Any) -> BackendConfig:
    """Resolve the configuration, exiting with status 1 when it is invalid."""
    try:
        return load_config(**overrides)
    except GlobalConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)


def finish(result: WorkflowResult) -> None:
    """Report a workflow outcome and exit with its code."""
    if result.state == WorkflowState.FAILED:
        typer.echo(f"Error: {result.error}", err=True)
        if isinstance(result.error, AuthError):
            typer.echo("Check your key with: gyst config show", err=True)
        elif isinstance(result.error, ConfigError):
            typer.echo("See: gyst config --help", err=True)
    raise typer.Exit(result.exit_code)


def colorize_diff(text: str) -> str:
    """Color diff lines the way `git diff` does."""
    colorized = []
    for line in text.split("\n"):
        if line.startswith("@@"):
            colorized.append(typer.style(line, fg=typer.colors.CYAN))
        elif line.startswith(("---", "+++", "diff --git")):
            colorized.append(typer.style(line, bold=True))
        elif line.startswith("-"):
            colorized.append(typer.style(line, fg=typer.colors.RED))
        elif line.startswith("+"):
            colorized.append(typer.style(line, fg=typer.colors.GREEN))
        elif line.startswith("..."):
            colorized.append(typer.style(line, fg=typer.colors.YELLOW))
        else:
            colorized.append(line)
    return "\n".join(colorized)
