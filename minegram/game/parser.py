"""Minecraft server console parser.

Turns console lines into typed events. Handles both the vanilla layout

    [12:34:56] [Server thread/INFO]: <Steve> hello

and the Bukkit/Paper layout

    [12:34:56 INFO]: <Steve> hello

Only INFO lines are considered; everything else yields None.
"""

import re
from typing import Optional

from .events import (
    Advancement,
    Challenge,
    Chat,
    Death,
    GameEvent,
    Goal,
    Join,
    Leave,
    RosterReply,
    Say,
    SelfAction,
)

DEFAULT_TYPE = "default"

_TYPE_ALIASES = {
    "": DEFAULT_TYPE,
    "default": DEFAULT_TYPE,
    "vanilla": DEFAULT_TYPE,
    "minecraft": DEFAULT_TYPE,
    "bukkit": "bukkit",
    "spigot": "bukkit",
    "paper": "bukkit",
    "papermc": "bukkit",
    "purpur": "bukkit",
}

_LINE_RE = re.compile(
    r"^\[(?P<time>[\d:.]+)(?: (?P<short_level>[A-Z]+))?\]"
    r"(?: \[(?P<thread>[^\]]+)/(?P<level>[A-Z]+)\])?"
    r"(?: \[[^\]]*\])?"
    r": (?P<body>.*)$"
)

_USER = r"(?P<user>[\w.]+)"

_CHAT_RE = re.compile(r"^(?:\[Not Secure\] )?<(?P<user>[^>]+)> (?P<text>.*)$")
_SELF_RE = re.compile(r"^\* " + _USER + r" (?P<text>.*)$")
_SAY_RE = re.compile(r"^\[(?P<user>[^\]\s:]+)\] (?P<text>.*)$")
_VJOIN_RE = re.compile(r"^" + _USER + r" joined the game$")
_LOGIN_RE = re.compile(r"^" + _USER + r"\[[^\]]*\] logged in with entity id")
_LEAVE_RE = re.compile(r"^" + _USER + r" left the game$")
_ADVANCEMENT_RE = re.compile(r"^" + _USER + r" has made the advancement \[(?P<name>.+)\]$")
_GOAL_RE = re.compile(r"^" + _USER + r" has reached the goal \[(?P<name>.+)\]$")
_CHALLENGE_RE = re.compile(r"^" + _USER + r" has completed the challenge \[(?P<name>.+)\]$")
_LIST_RE = re.compile(
    r"^There are (?P<current>\d+)(?: of a max(?: of)? |/)(?P<max>\d+) players online:\s*(?P<names>.*)$"
)

# Leading words of vanilla death messages
_DEATH_RE = re.compile(
    r"^" + _USER + r" (?P<text>(?:"
    r"died|was|walked|drowned|experienced|blew|hit|fell|went|burned|tried|"
    r"starved|suffocated|withered|froze|discovered|didn't|got|"
    r"left the confines"
    r")(?: .*)?)$"
)


def fix_type(server_type: Optional[str]) -> str:
    """Normalize the configured server type name."""
    name = (server_type or "").strip().lower()
    return _TYPE_ALIASES.get(name, name)


def split_line(line: str) -> Optional[str]:
    """Message body of an INFO console line, or None."""
    m = _LINE_RE.match(line.rstrip("\r\n"))
    if not m:
        return None
    level = m.group("level") or m.group("short_level")
    if level != "INFO":
        return None
    return m.group("body")


def parse_body(body: str) -> Optional[GameEvent]:
    """Classify an INFO message body."""
    if m := _CHAT_RE.match(body):
        return Chat(user=m["user"], text=m["text"])
    if m := _SELF_RE.match(body):
        return SelfAction(user=m["user"], text=m["text"])
    if m := _LIST_RE.match(body):
        return RosterReply(current=int(m["current"]), max=int(m["max"]), names=m["names"])
    if m := _SAY_RE.match(body):
        return Say(user=m["user"], text=m["text"])
    if m := _VJOIN_RE.match(body):
        return Join(user=m["user"], vanilla=True)
    if m := _LOGIN_RE.match(body):
        return Join(user=m["user"])
    if m := _LEAVE_RE.match(body):
        return Leave(user=m["user"])
    if m := _ADVANCEMENT_RE.match(body):
        return Advancement(user=m["user"], name=m["name"])
    if m := _GOAL_RE.match(body):
        return Goal(user=m["user"], name=m["name"])
    if m := _CHALLENGE_RE.match(body):
        return Challenge(user=m["user"], name=m["name"])
    if m := _DEATH_RE.match(body):
        return Death(user=m["user"], text=m["text"])
    return None


def parse_line(line: str) -> Optional[GameEvent]:
    body = split_line(line)
    if body is None:
        return None
    return parse_body(body)
