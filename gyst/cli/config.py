"""CLI commands for global configuration management."""

from typing import Optional

import typer

from gyst import global_config
from gyst.cli.utils import load_config_or_exit
from gyst.config import API_KEY_ENV_VAR, AVAILABLE_MODELS, BackendMode

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global gyst configuration in ~/.gyst/",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    config = load_config_or_exit()

    typer.echo(f"Current gyst configuration ({global_config.get_config_file_path()}):")
    typer.echo()
    typer.echo(f"  Mode: {config.mode.value}")
    if config.mode == BackendMode.RELAY:
        typer.echo(f"  Relay URL: {config.relay_url}")
    typer.echo(f"  Model: {config.model}")
    typer.echo(f"  Timeout: {config.timeout:g}s")
    typer.echo(f"  Max Diff Size: {config.max_diff_size} lines")
    typer.echo(f"  Max Subject Length: {config.max_subject_length}")
    typer.echo(f"  Rename Threshold: {config.rename_threshold}%")
    if config.editor:
        typer.echo(f"  Editor: {config.editor}")
    typer.echo()
    typer.echo(f"  API Key ({API_KEY_ENV_VAR}): {config.masked_api_key()}")


@config_app.command("set-key")
def config_set_key() -> None:
    """Store the Anthropic API key used in direct mode."""
    api_key = typer.prompt("Enter your Anthropic API key", hide_input=True).strip()
    if not api_key:
        typer.echo("No key entered.", err=True)
        raise typer.Exit(1)

    try:
        global_config.save_credential(API_KEY_ENV_VAR, api_key)
    except (OSError, global_config.GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved to {global_config.get_credentials_file_path()}")


@config_app.command("set-mode")
def config_set_mode(
    mode: str = typer.Argument(..., help="Backend mode (relay, direct)"),
) -> None:
    """Choose between the relay server and direct API access."""
    try:
        backend_mode = BackendMode(mode.lower())
    except ValueError:
        typer.echo(f"Invalid mode: {mode}", err=True)
        typer.echo("Valid modes: relay, direct")
        raise typer.Exit(1)

    try:
        global_config.set_config_value("ai", "mode", backend_mode.value)
    except (OSError, global_config.GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Mode set to: {backend_mode.value}")
    if backend_mode == BackendMode.DIRECT and not global_config.get_credential(API_KEY_ENV_VAR):
        typer.echo("Direct mode needs an API key: run 'gyst config set-key'", err=True)


@config_app.command("set-model")
def config_set_model(
    model: Optional[str] = typer.Argument(None, help="Model name (prompts if omitted)"),
) -> None:
    """Set the model used in direct mode."""
    if not model:
        typer.echo("Available models:")
        for i, m in enumerate(AVAILABLE_MODELS, 1):
            typer.echo(f"  {i}. {m}")

        model_choice = typer.prompt(f"Select a model (1-{len(AVAILABLE_MODELS)})", type=int, default=1)
        if model_choice < 1 or model_choice > len(AVAILABLE_MODELS):
            typer.echo("Invalid choice. Aborting.", err=True)
            raise typer.Exit(1)
        model = AVAILABLE_MODELS[model_choice - 1]
    elif model not in AVAILABLE_MODELS:
        typer.echo(f"Warning: {model} is not in the list of known models")
        if not typer.confirm("Continue anyway?", default=False):
            raise typer.Exit(0)

    try:
        global_config.set_config_value("ai", "model", model)
    except (OSError, global_config.GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Model set to: {model}")
