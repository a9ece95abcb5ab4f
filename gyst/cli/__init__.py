"""CLI entry point for gyst.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from gyst.cli.config import config_app
from gyst.cli.commit import commit_command
from gyst.cli.suggest import suggest_command
from gyst.cli.explain import explain_command
from gyst.cli.diff import diff_command
from gyst.cli.health import health_command
from gyst.cli.main import main_command

# Main application
app = typer.Typer(
    name="gyst",
    help="gyst: AI-written commit messages for your staged changes",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("commit")(commit_command)
app.command("suggest")(suggest_command)
app.command("explain")(explain_command)
app.command("diff")(diff_command)
app.command("health")(health_command)

# Root callback handles --version and -v
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "commit_command",
    "suggest_command",
    "explain_command",
    "diff_command",
    "health_command",
    "main_command",
]
