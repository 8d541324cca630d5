"""Start command."""

import asyncio
import click

from . import cli
from .shared import console


@cli.command()
@click.option("--config", "-c", "config_name", default=None, help="Load settings from NAME.json")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def start(config_name, debug):
    """Start the Minecraft server and relay its chat to Telegram."""
    if debug:
        import logging
        logging.getLogger("minegram").setLevel(logging.DEBUG)

    from minegram.errors import ConfigError
    from minegram.main import run
    console.print("[bold blue]Starting Minegram...[/bold blue]")
    try:
        asyncio.run(run(config_name))
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise SystemExit(1)
