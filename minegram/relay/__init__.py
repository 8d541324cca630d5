"""Relay core: Telegram message → tellraw, game event → Telegram HTML.

- Message: InboundMessage model and the Telegram adapter
- Identity / Content / Reply: who wrote it, what it says, what it answers
- Payload: rich-text document and tellraw serialization
- Roster / Formatter: online players and outbound announcements
- Session: lifecycle and wiring
"""

from .content import extract_text
from .formatter import format_event, format_roster
from .identity import display_name, is_self_authored
from .message import Attachment, AttachmentKind, Author, InboundMessage, from_telegram
from .payload import build_command, compose, to_command
from .reply import ReplyContext, resolve_reply
from .roster import Roster
from .session import RelaySession

__all__ = [
    "Attachment",
    "AttachmentKind",
    "Author",
    "InboundMessage",
    "from_telegram",
    "is_self_authored",
    "display_name",
    "extract_text",
    "ReplyContext",
    "resolve_reply",
    "compose",
    "to_command",
    "build_command",
    "Roster",
    "format_event",
    "format_roster",
    "RelaySession",
]
