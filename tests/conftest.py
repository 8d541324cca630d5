"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from minegram.config import BridgeSettings
from minegram.relay.message import Attachment, AttachmentKind, Author, InboundMessage

BOT_ID = 4242
CHAT_ID = -1001234


class FakeGame:
    """Stand-in for GameClient: records commands, lets tests emit events."""

    def __init__(self):
        self.sent: list[str] = []
        self.handlers = []
        self.started = False
        self.stopped = False

    def on(self, handler):
        self.handlers.append(handler)

    def off(self, handler):
        if handler in self.handlers:
            self.handlers.remove(handler)

    async def send(self, command: str):
        self.sent.append(command)

    async def start(self):
        self.started = True

    async def stop(self):
        self.stopped = True

    async def emit(self, event):
        for handler in list(self.handlers):
            await handler(event)


@pytest.fixture
def game():
    return FakeGame()


@pytest.fixture
def make_settings():
    """Build settings for a bot whose id is BOT_ID, bound to CHAT_ID."""
    def _make(**overrides):
        values = {
            "token": f"{BOT_ID}:TEST-SECRET",
            "chat_id": str(CHAT_ID),
            "allow_list": False,
            "post_updates": False,
        }
        values.update(overrides)
        return BridgeSettings(**values)
    return _make


@pytest.fixture
def mock_app():
    """Mocked python-telegram-bot Application."""
    app = MagicMock()
    app.bot.id = BOT_ID
    app.bot.send_message = AsyncMock()
    app.initialize = AsyncMock()
    app.start = AsyncMock()
    app.stop = AsyncMock()
    app.shutdown = AsyncMock()
    app.running = True
    app.updater.running = True
    app.updater.start_polling = AsyncMock()
    app.updater.stop = AsyncMock()
    return app


def make_message(
    text=None,
    author_id=1,
    first_name="Ann",
    last_name=None,
    chat_id=CHAT_ID,
    kind: AttachmentKind | None = None,
    caption=None,
    reply_to=None,
    message_id=1,
    no_author=False,
) -> InboundMessage:
    """InboundMessage shortcut for tests."""
    author = None if no_author else Author(id=author_id, first_name=first_name, last_name=last_name)
    attachment = Attachment(kind=kind, caption=caption) if kind else None
    return InboundMessage(
        message_id=message_id,
        chat_id=chat_id,
        author=author,
        text=text,
        attachment=attachment,
        reply_to=reply_to,
    )


def bot_message(text, **kwargs) -> InboundMessage:
    """A message the bridge posted itself (relayed from the game)."""
    return make_message(text=text, author_id=BOT_ID, first_name="Minegram", **kwargs)
