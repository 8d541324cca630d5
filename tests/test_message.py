"""Tests for the Telegram → InboundMessage adapter."""

from datetime import datetime, timezone

from telegram import Chat, Document, Location, Message, MessageEntity, PhotoSize, User, Voice

from minegram.relay.message import AttachmentKind, TextLink, from_telegram

_CHAT = Chat(id=-1001234, type=Chat.SUPERGROUP)
_ANN = User(id=1, first_name="Ann", is_bot=False)


def _tg_message(message_id=1, from_user=_ANN, **kwargs) -> Message:
    return Message(
        message_id=message_id,
        date=datetime.now(timezone.utc),
        chat=_CHAT,
        from_user=from_user,
        **kwargs,
    )


def _photo():
    return [PhotoSize(file_id="p1", file_unique_id="u1", width=90, height=90)]


class TestFromTelegram:

    def test_text_message(self):
        msg = from_telegram(_tg_message(text="hello"))
        assert msg.text == "hello"
        assert msg.chat_id == -1001234
        assert msg.author.id == 1
        assert msg.author.first_name == "Ann"
        assert msg.author.last_name is None
        assert msg.attachment is None

    def test_last_name(self):
        user = User(id=2, first_name="Bob", last_name="Stone", is_bot=False)
        msg = from_telegram(_tg_message(text="hi", from_user=user))
        assert msg.author.last_name == "Stone"

    def test_no_author(self):
        msg = from_telegram(_tg_message(text="hi", from_user=None))
        assert msg.author is None

    def test_photo_with_caption(self):
        msg = from_telegram(_tg_message(photo=_photo(), caption="nice"))
        assert msg.text is None
        assert msg.attachment.kind is AttachmentKind.PHOTO
        assert msg.attachment.caption == "nice"

    def test_voice_without_caption(self):
        voice = Voice(file_id="v1", file_unique_id="u2", duration=3)
        msg = from_telegram(_tg_message(voice=voice))
        assert msg.attachment.kind is AttachmentKind.VOICE
        assert msg.attachment.caption is None

    def test_location(self):
        msg = from_telegram(_tg_message(location=Location(longitude=1.0, latitude=2.0)))
        assert msg.attachment.kind is AttachmentKind.LOCATION

    def test_priority_order(self):
        """Document is checked before photo."""
        doc = Document(file_id="d1", file_unique_id="u3")
        msg = from_telegram(_tg_message(photo=_photo(), document=doc))
        assert msg.attachment.kind is AttachmentKind.DOCUMENT

    def test_reply_is_one_level_deep(self):
        root = _tg_message(message_id=1, text="root")
        middle = _tg_message(message_id=2, text="middle", reply_to_message=root)
        leaf = _tg_message(message_id=3, text="leaf", reply_to_message=middle)

        msg = from_telegram(leaf)
        assert msg.reply_to.text == "middle"
        assert msg.reply_to.reply_to is None

    def test_caption_text_link_offsets_are_utf16(self):
        """Telegram counts the emoji as two units; the link must still cover "map"."""
        link = MessageEntity(type=MessageEntity.TEXT_LINK, offset=3, length=3, url="https://example.com/map")
        bold = MessageEntity(type=MessageEntity.BOLD, offset=7, length=4)
        msg = from_telegram(_tg_message(photo=_photo(), caption="🎉 map here", caption_entities=[link, bold]))

        assert msg.attachment.caption_links == (TextLink(start=2, end=5, url="https://example.com/map"),)
        assert msg.attachment.caption[2:5] == "map"

    def test_text_links(self):
        link = MessageEntity(type=MessageEntity.TEXT_LINK, offset=0, length=4, url="https://example.com")
        msg = from_telegram(_tg_message(text="docs please", entities=[link]))
        assert msg.text_links == (TextLink(start=0, end=4, url="https://example.com"),)

    def test_no_entities(self):
        msg = from_telegram(_tg_message(text="hello"))
        assert msg.text_links == ()
