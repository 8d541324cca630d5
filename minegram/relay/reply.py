"""Reply threading: hover context for messages that answer another message."""

from dataclasses import dataclass

from .content import extract_text
from .identity import display_name, is_self_authored
from .message import InboundMessage
from .spans import Span


@dataclass(frozen=True)
class ReplyContext:
    hover_type: str
    hover_is_from_platform: bool
    hover_user: str
    hover_text: str | list[Span]


def resolve_reply(message: InboundMessage, bot_id) -> ReplyContext | None:
    """Describe the replied-to message, or None if this is not a reply.

    Only the direct target is resolved; its own reply target is ignored.
    """
    target = message.reply_to
    if target is None:
        return None
    return ReplyContext(
        hover_type="Reply",
        hover_is_from_platform=not is_self_authored(target, bot_id),
        hover_user=display_name(target, bot_id),
        hover_text=extract_text(target, bot_id),
    )
