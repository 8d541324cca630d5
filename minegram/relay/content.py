"""Content extraction: textual form of a Telegram message.

Text messages are returned verbatim. Media messages become a bracket tag
such as [PHOTO], followed by the caption when there is one:

    [PHOTO]            no caption
    [PHOTO] nice       caption "nice"

Messages the bridge itself posted have the leading game username removed,
which is the inverse of how game chat is written into Telegram.
"""

import logging

from .identity import is_self_authored, strip_game_username
from .message import Attachment, InboundMessage
from .spans import Span, text_to_spans

logger = logging.getLogger("minegram.relay.content")

_TAG_POSITION = 3


def attachment_spans(attachment: Attachment) -> list[Span]:
    """Bracket tag for an attachment, with its caption spans after the tag."""
    if not attachment.caption:
        return [
            Span(text="[", color="white"),
            Span(text=attachment.kind.label, color="gray"),
            Span(text="]", color="white"),
        ]
    spans = [
        Span(text="[", color="white"),
        Span(text=attachment.kind.label, color="gray"),
        Span(text="] ", color="white"),
    ]
    spans[_TAG_POSITION:_TAG_POSITION] = text_to_spans(attachment.caption, links=attachment.caption_links)
    return spans


def extract_text(message: InboundMessage, bot_id) -> str | list[Span]:
    """Text of a message, or tag spans for media; empty when nothing is recognized."""
    if is_self_authored(message, bot_id):
        return strip_game_username(message.text)
    if message.text:
        if message.text_links:
            return text_to_spans(message.text, links=message.text_links)
        return message.text
    if message.attachment is not None:
        return attachment_spans(message.attachment)
    logger.debug(f"Message {message.message_id} has no text or known attachment")
    return ""
