"""Inbound message model.

This is the SINGLE place where python-telegram-bot objects are mapped to
the platform-agnostic InboundMessage used by the relay pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from telegram import Message, MessageEntity


class AttachmentKind(Enum):
    """Non-text message kinds, declared in relay priority order."""

    AUDIO = ("audio", "AUDIO")
    DOCUMENT = ("document", "DOCUMENT")
    PHOTO = ("photo", "PHOTO")
    STICKER = ("sticker", "STICKER")
    VIDEO = ("video", "VIDEO")
    VOICE = ("voice", "VOICE")
    CONTACT = ("contact", "CONTACT")
    LOCATION = ("location", "LOCATION")
    GAME = ("game", "GAME")
    VIDEO_NOTE = ("video_note", "VIDEO NOTE")

    @property
    def field(self) -> str:
        """Attribute name on a Telegram Message."""
        return self.value[0]

    @property
    def label(self) -> str:
        """Tag shown in game, e.g. [PHOTO]."""
        return self.value[1]


@dataclass(frozen=True)
class TextLink:
    """Hidden link over text[start:end] (Python string indices)."""

    start: int
    end: int
    url: str


@dataclass(frozen=True)
class Attachment:
    kind: AttachmentKind
    caption: Optional[str] = None
    caption_links: tuple[TextLink, ...] = ()


@dataclass(frozen=True)
class Author:
    id: int
    first_name: str = ""
    last_name: Optional[str] = None


@dataclass(frozen=True)
class InboundMessage:
    message_id: int
    chat_id: int
    author: Optional[Author] = None
    text: Optional[str] = None
    attachment: Optional[Attachment] = None
    reply_to: Optional["InboundMessage"] = None
    text_links: tuple[TextLink, ...] = ()


def _text_links(text: Optional[str], entities: Sequence[MessageEntity]) -> tuple[TextLink, ...]:
    """Convert text_link entities to TextLinks.

    Telegram offsets count UTF-16 code units, so they are mapped back to
    Python string indices here.
    """
    if not text or not entities:
        return ()
    encoded = text.encode("utf-16-le")
    links = []
    for entity in entities:
        if entity.type != MessageEntity.TEXT_LINK or not entity.url:
            continue
        start = len(encoded[: entity.offset * 2].decode("utf-16-le"))
        length = len(encoded[entity.offset * 2 : (entity.offset + entity.length) * 2].decode("utf-16-le"))
        links.append(TextLink(start=start, end=start + length, url=entity.url))
    return tuple(sorted(links, key=lambda link: link.start))


def _attachment_from_telegram(msg: Message) -> Optional[Attachment]:
    """First attachment kind present on the message, in priority order."""
    for kind in AttachmentKind:
        if getattr(msg, kind.field, None):
            return Attachment(
                kind=kind,
                caption=msg.caption or None,
                caption_links=_text_links(msg.caption, msg.caption_entities),
            )
    return None


def from_telegram(msg: Message, follow_reply: bool = True) -> InboundMessage:
    """Build an InboundMessage from a Telegram Message.

    Only one level of reply is mapped: the reply target's own
    reply_to_message is dropped.
    """
    user = msg.from_user
    author = None
    if user is not None:
        author = Author(id=user.id, first_name=user.first_name or "", last_name=user.last_name or None)

    reply_to = None
    if follow_reply and msg.reply_to_message is not None:
        reply_to = from_telegram(msg.reply_to_message, follow_reply=False)

    return InboundMessage(
        message_id=msg.message_id,
        chat_id=msg.chat_id,
        author=author,
        text=msg.text or None,
        attachment=_attachment_from_telegram(msg),
        reply_to=reply_to,
        text_links=_text_links(msg.text, msg.entities),
    )
