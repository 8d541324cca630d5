"""Minecraft server process client and console parser."""

from .client import GameClient
from .parser import fix_type, parse_line

__all__ = ["GameClient", "fix_type", "parse_line"]
