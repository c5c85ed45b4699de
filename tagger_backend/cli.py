"""
Command line interface.

    tagger-backend serve --port 8080
    tagger-backend serve --in-memory
    tagger-backend check-config
"""

import json

import click
import uvicorn
from dotenv import load_dotenv

from .app import create_app
from .config import COLLECTION_SETTINGS, AppConfig
from .exceptions import ConfigurationError
from .observability import configure_logging
from .repositories import RepositoryRegistry


@click.group()
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=".env",
    show_default=True,
    help="dotenv file loaded before reading settings",
)
def cli(env_file: str) -> None:
    """Tagger backend: CRUD API over MongoDB."""
    load_dotenv(env_file)


@cli.command()
@click.option("--host", help="Interface to bind (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, help="Port to bind (default: PORT or 8000)")
@click.option(
    "--in-memory",
    is_flag=True,
    help="Serve from in-memory repositories instead of MongoDB",
)
def serve(host: str | None, port: int | None, in_memory: bool) -> None:
    """Run the HTTP server under uvicorn."""
    config = AppConfig(host=host, port=port)
    configure_logging(config.log_level)

    registry = RepositoryRegistry.in_memory() if in_memory else None
    uvicorn.run(
        create_app(config, registry=registry),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


@cli.command("check-config")
def check_config() -> None:
    """
    Validate the current configuration and print it.

    The MongoDB URI is not printed.
    """
    config = AppConfig()
    try:
        config.validate()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    settings = {
        "db_name": config.db_name,
        "collections": {setting: getattr(config, setting) for setting in COLLECTION_SETTINGS},
        "max_pool_size": config.max_pool_size,
        "min_pool_size": config.min_pool_size,
        "server_selection_timeout_ms": config.server_selection_timeout_ms,
        "host": config.host,
        "port": config.port,
    }
    click.echo(json.dumps(settings, indent=2))
    click.echo(click.style("✅ Configuration is valid", fg="green"))
