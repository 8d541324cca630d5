"""Minegram CLI: command line interface."""

import click
from minegram import __version__
from .shared import console


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="minegram")
@click.pass_context
def cli(ctx):
    """Minegram: Telegram ⇄ Minecraft chat bridge"""
    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands."""
    console.print(f"[bold]Minegram v{__version__}[/bold]: Telegram ⇄ Minecraft chat bridge\n")

    commands = [
        ("start", "Start the server and the bridge"),
        ("status", "Show the effective configuration"),
    ]
    for name, desc in commands:
        console.print(f"    [bold]minegram {name:10s}[/bold] {desc}")
    console.print()
    console.print("[dim]Run 'minegram <command> --help' for details on a specific command.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_start  # noqa: E402, F401
from . import cmd_status  # noqa: E402, F401
