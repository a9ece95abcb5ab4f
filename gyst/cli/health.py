"""CLI command for checking the configured backend."""

import typer

from gyst.cli.utils import load_config_or_exit
from gyst.config import BackendMode
from gyst.llm import LLMError
from gyst.llm.relay_provider import RelayProvider


def health_command() -> None:
    """Check that the relay server is reachable."""
    config = load_config_or_exit()

    if config.mode == BackendMode.DIRECT:
        typer.echo(f"Mode: direct ({config.model})")
        typer.echo(f"API key: {config.masked_api_key()}")
        if not config.api_key:
            raise typer.Exit(1)
        return

    relay = RelayProvider(base_url=config.relay_url, timeout=config.timeout)
    try:
        info = relay.health_check()
    except LLMError as e:
        typer.echo(f"Relay at {config.relay_url} is not healthy: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Mode: relay ({config.relay_url})")
    typer.echo(f"Status: {info.get('status', 'unknown')}")
    if info.get("version"):
        typer.echo(f"Server version: {info['version']}")
