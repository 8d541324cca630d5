"""Roster tracking: who is online right now.

The roster is mutated by joins, leaves, and one bootstrap `list` query at
startup. Names are unique; the most recent joiner is last.
"""

import asyncio
import logging
import re

from ..errors import RosterTimeout
from ..game.events import GameEvent, RosterReply

logger = logging.getLogger("minegram.relay.roster")

# Max wait for the server to answer the bootstrap `list` (5 minutes)
ROSTER_TIMEOUT = 300.0

_NAME_SPLIT_RE = re.compile(r"\s*,\s*")


def parse_names(names: str) -> list[str]:
    """Split the `list` reply's player list, dropping empty names."""
    return [n for n in _NAME_SPLIT_RE.split(names.strip()) if n]


class Roster:
    """Ordered set of online player names plus server capacity."""

    def __init__(self, players: list[str] | None = None, max_players: int = 0):
        self.players: list[str] = []
        self.max_players = max_players
        for name in players or []:
            self.on_join(name)

    def __len__(self) -> int:
        return len(self.players)

    def __iter__(self):
        return iter(list(self.players))

    def __contains__(self, name) -> bool:
        return name in self.players

    def on_join(self, name: str) -> str:
        """Add a player (moving them to the end if already present)."""
        self.players = [p for p in self.players if p != name] + [name]
        return name

    def on_leave(self, name: str) -> str:
        """Remove a player; unknown names are ignored."""
        self.players = [p for p in self.players if p != name]
        return name

    def replace(self, names: list[str], max_players: int):
        """Replace the whole roster with a fresh server answer."""
        self.players = list(dict.fromkeys(names))
        self.max_players = max_players

    async def bootstrap(self, game, timeout: float = ROSTER_TIMEOUT) -> RosterReply:
        """Query the server's player list and load it into the roster.

        Whichever comes first wins: the reply, or the timeout. A reply
        arriving after the timeout is ignored.

        Raises:
            RosterTimeout: no reply within `timeout` seconds.
        """
        reply: asyncio.Future = asyncio.get_running_loop().create_future()

        async def _on_event(event: GameEvent):
            if isinstance(event, RosterReply) and not reply.done():
                reply.set_result(event)

        game.on(_on_event)
        try:
            await game.send("list")
            try:
                result = await asyncio.wait_for(reply, timeout=timeout)
            except asyncio.TimeoutError:
                raise RosterTimeout(f"/list took too long (no reply in {timeout:.0f}s)") from None
        finally:
            game.off(_on_event)

        self.replace(parse_names(result.names), result.max)
        logger.info(f"Roster loaded: {len(self.players)}/{self.max_players} online")
        return result
