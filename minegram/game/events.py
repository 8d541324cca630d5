"""Typed events emitted by the game client."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Chat:
    user: str
    text: str


@dataclass(frozen=True)
class SelfAction:
    """/me action."""
    user: str
    text: str


@dataclass(frozen=True)
class Say:
    """/say broadcast (user is "Server" when sent from the console)."""
    user: str
    text: str


@dataclass(frozen=True)
class Join:
    user: str
    # Parsed from the vanilla "joined the game" line rather than the login line
    vanilla: bool = False


@dataclass(frozen=True)
class Leave:
    user: str


@dataclass(frozen=True)
class Death:
    user: str
    text: str


@dataclass(frozen=True)
class Advancement:
    user: str
    name: str


@dataclass(frozen=True)
class Goal:
    user: str
    name: str


@dataclass(frozen=True)
class Challenge:
    user: str
    name: str


@dataclass(frozen=True)
class RosterReply:
    """Answer to the `list` console command; names is the raw comma list."""
    current: int
    max: int
    names: str


@dataclass(frozen=True)
class Closed:
    """Server process exited."""
    returncode: int | None = None


GameEvent = (
    Chat | SelfAction | Say | Join | Leave | Death
    | Advancement | Goal | Challenge | RosterReply | Closed
)
