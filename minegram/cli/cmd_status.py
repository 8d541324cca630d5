"""Status command."""

import click
from rich.table import Table

from . import cli
from .shared import console, mask_token


@cli.command()
@click.option("--config", "-c", "config_name", default=None, help="Load settings from NAME.json")
def status(config_name):
    """Show the effective configuration."""
    from minegram import __version__
    from minegram.config import load_settings
    from minegram.errors import ConfigError
    from minegram.game.parser import fix_type

    try:
        settings = load_settings(config_name)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise SystemExit(1)

    table = Table(title=f"Minegram v{__version__}", show_header=False, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Bot token", mask_token(settings.token))
    table.add_row("Chat id", str(settings.chat_id))
    table.add_row("Server command", settings.server_command)
    table.add_row("Server directory", settings.server_cwd or "(current)")
    table.add_row("Server type", fix_type(settings.server_type))
    table.add_row("Player list", "enabled" if settings.allow_list else "disabled")
    table.add_row("Release announcements", "enabled" if settings.post_updates else "disabled")

    console.print(table)
