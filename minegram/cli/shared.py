"""Shared utilities for Minegram CLI commands."""

from rich.console import Console

console = Console()


def mask_token(token: str | None) -> str:
    """Show only the bot id part of a token."""
    if not token:
        return "(not set)"
    bot_id, _, secret = token.partition(":")
    return f"{bot_id}:{'*' * min(len(secret), 8)}" if secret else "*" * 8
