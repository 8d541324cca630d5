"""Game event → Telegram HTML message."""

from typing import Optional

from ..formatting import bold, code, escape
from ..game.events import (
    Advancement,
    Challenge,
    Chat,
    Death,
    GameEvent,
    Goal,
    Join,
    Leave,
    Say,
    SelfAction,
)
from .roster import Roster


def format_event(event: GameEvent, roster: Optional[Roster] = None) -> Optional[str]:
    """One outbound message per event; None for events that are not announced.

    Join and leave update the roster, when one is tracked.
    """
    if isinstance(event, Chat):
        return code(event.user) + " " + escape(event.text)
    if isinstance(event, SelfAction):
        return code(f"* {event.user} {event.text}")
    if isinstance(event, Say):
        return code(f"{event.user}: {event.text}")
    if isinstance(event, Join):
        name = roster.on_join(event.user) if roster is not None else event.user
        return code(f"{name} joined the server")
    if isinstance(event, Leave):
        name = roster.on_leave(event.user) if roster is not None else event.user
        return code(f"{name} left the server")
    if isinstance(event, Death):
        return code(f"{event.user} {event.text}")
    if isinstance(event, Advancement):
        return code(event.user) + " has made the advancement " + code(f"[{event.name}]")
    if isinstance(event, Goal):
        return code(event.user) + " has reached the goal " + code(f"[{event.name}]")
    if isinstance(event, Challenge):
        return code(event.user) + " has completed the challenge " + code(f"[{event.name}]")
    return None


def format_update(version: str) -> str:
    return bold("New version released:") + " " + code(version)


def format_roster(roster: Roster) -> str:
    """Reply for /list."""
    return (
        "Players online "
        f"({code(len(roster))}/{code(roster.max_players)}):\n"
        + code("\n".join(roster))
    )
