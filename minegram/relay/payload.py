"""Payload composition: Telegram message → tellraw command.

Document layout:

    [Reply] [TG] <Ann> hello
    ^^^^^^^ only for replies, hover shows the replied-to message

The result is one `tellraw @a <json>` command for the server console.
"""

import json
from typing import Optional

from .reply import ReplyContext
from .spans import GAME_MARKER, PLATFORM_MARKER, Span, as_spans

COMMAND = "tellraw @a "


def compose(
    is_from_platform: bool,
    author: str,
    content: str | list[Span],
    reply: Optional[ReplyContext] = None,
) -> list[Span]:
    """Assemble the rich-text document for one relayed message."""
    spans = []
    if reply is not None:
        spans.append(Span(
            text="[Reply] ",
            color="gray",
            hover_type=reply.hover_type,
            hover_user=reply.hover_user,
            hover_is_from_platform=reply.hover_is_from_platform,
            hover_text=as_spans(reply.hover_text),
        ))
    marker, marker_color = PLATFORM_MARKER if is_from_platform else GAME_MARKER
    spans.append(Span(text=marker, color=marker_color))
    spans.append(Span(text="<", color="white"))
    spans.append(Span(text=author or "", color="yellow"))
    spans.append(Span(text="> ", color="white"))
    spans.extend(as_spans(content))
    return spans


def to_command(spans: list[Span]) -> str:
    """Serialize a document to the tellraw console command."""
    # Leading "" keeps later components from inheriting the first one's style
    document = [""] + [s.to_component() for s in spans]
    return COMMAND + json.dumps(document, ensure_ascii=False, separators=(",", ":"))


def build_command(
    is_from_platform: bool,
    author: str,
    content: str | list[Span],
    reply: Optional[ReplyContext] = None,
) -> str:
    return to_command(compose(is_from_platform, author, content, reply))
