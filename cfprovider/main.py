"""Main entry point for the cfprovider CLI.

Sets up the Typer application, wires the dependencies (Composition Root)
and delegates each command to the CommandHandler.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from cfprovider import __version__
from cfprovider.core.command_handler import CommandHandler
from cfprovider.core.provider import Provider
from cfprovider.infrastructure.cli.display import ConsoleDisplay
from cfprovider.infrastructure.config.settings import get_logging_settings
from cfprovider.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_TOOL_VERSION = "dev"

app = typer.Typer(
    name="cfprovider",
    help="Resolve and validate Cloudflare provider configuration.",
    add_completion=False,
)


def create_command_handler(provider_version: str = __version__) -> CommandHandler:
    """Creates and wires up the dependencies for one command invocation."""
    setup_logging(**get_logging_settings())
    provider = Provider(version=provider_version)
    return CommandHandler(provider=provider, ui=ConsoleDisplay())


@app.command()
def validate(
    config: Annotated[Optional[Path], typer.Option(
        "--config", "-c", exists=True, file_okay=True, dir_okay=False, readable=True,
        help="YAML file with a 'provider' block of explicit settings.",
    )] = None,
    env_file: Annotated[Optional[Path], typer.Option(
        "--env-file", exists=True, file_okay=True, dir_okay=False, readable=True,
        help=".env file to load before reading the environment.",
    )] = None,
    tool_version: Annotated[str, typer.Option(
        "--tool-version", help="Version of the orchestrating tool, used in the user agent.",
    )] = DEFAULT_TOOL_VERSION,
):
    """Resolve the provider configuration and build the API client without calling the API."""
    handler = create_command_handler()
    exit_code = handler.handle_validate(tool_version=tool_version, config_file=config, env_file=env_file)
    raise typer.Exit(code=exit_code)


@app.command()
def describe():
    """Print the provider schema with generated descriptions."""
    handler = create_command_handler()
    raise typer.Exit(code=handler.handle_describe())


@app.command()
def version():
    """Print the provider version."""
    typer.echo(__version__)


def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
