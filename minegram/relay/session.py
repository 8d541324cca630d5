"""Relay session: one Telegram chat bound to one Minecraft server.

Owns every piece of mutable bridge state (roster, bot identity, background
tasks) with an explicit start()/stop() lifecycle:

    session = RelaySession(settings, game)
    await session.start()
    await session.wait_closed()     # until the server exits
    await session.stop()            # idempotent

Telegram → game goes through handle_message(), game → Telegram through
handle_event().
"""

import asyncio
import logging
from typing import Optional

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from ..config import BridgeSettings
from ..errors import GameClientClosed, RosterTimeout
from ..game.client import GameClient
from ..game.events import Closed, GameEvent, Join
from ..game.parser import DEFAULT_TYPE, fix_type
from ..update_checker import VersionWatcher
from .content import extract_text
from .formatter import format_event, format_roster, format_update
from .identity import display_name, is_self_authored
from .message import InboundMessage, from_telegram
from .payload import build_command
from .reply import resolve_reply
from .roster import Roster

logger = logging.getLogger("minegram.relay")

# Text plus every relayed attachment kind; edits and channel posts are not relayed.
# Slash text is relayed too (e.g. "/tp"); /chatid and /list are claimed first
# by their CommandHandlers.
RELAY_FILTER = filters.UpdateType.MESSAGE & (
    filters.TEXT
    | filters.AUDIO
    | filters.Document.ALL
    | filters.PHOTO
    | filters.Sticker.ALL
    | filters.VIDEO
    | filters.VOICE
    | filters.CONTACT
    | filters.LOCATION
    | filters.GAME
    | filters.VIDEO_NOTE
)


class RelaySession:
    """Bidirectional Telegram ⇄ Minecraft relay."""

    def __init__(
        self,
        settings: BridgeSettings,
        game: GameClient,
        application: Optional[Application] = None,
        watcher: Optional[VersionWatcher] = None,
    ):
        self.settings = settings
        self.chat_id = str(settings.chat_id)
        # Token prefix is the bot id; refreshed from getMe on start()
        self.bot_id = settings.token.split(":")[0]
        self.server_type = fix_type(settings.server_type)
        self.game = game
        self.app = application
        self.roster: Optional[Roster] = Roster() if settings.allow_list else None
        if watcher is None and settings.post_updates:
            watcher = VersionWatcher(on_update=self._announce_update, interval=settings.update_interval)
        self.watcher = watcher
        self._bootstrap_task: Optional[asyncio.Task] = None
        self._stopping = False
        self._closed = asyncio.Event()

    # ── lifecycle ──

    def _register_handlers(self):
        """Register all Telegram handlers on self.app."""
        self.app.add_handler(CommandHandler("chatid", self._cmd_chatid))
        if self.roster is not None:
            self.app.add_handler(CommandHandler("list", self._cmd_list))
        self.app.add_handler(MessageHandler(RELAY_FILTER, self._on_message))
        self.app.add_error_handler(self._handle_error)

    async def start(self):
        """Connect to Telegram, launch the server, and start relaying."""
        if self.app is None:
            self.app = Application.builder().token(self.settings.token).build()
        self._register_handlers()

        logger.info("Starting Telegram bot...")
        # Retry initialization (getMe) on transient network errors
        for attempt in range(5):
            try:
                await self.app.initialize()
                break
            except Exception as e:
                if attempt < 4:
                    delay = [2, 5, 10, 15][attempt]
                    logger.warning(f"Telegram init failed (attempt {attempt + 1}/5): {type(e).__name__}: {e}. Retrying in {delay}s...")
                    await asyncio.sleep(delay)
                else:
                    raise
        self.bot_id = str(self.app.bot.id)
        await self.app.start()
        await self.app.updater.start_polling(drop_pending_updates=True, allowed_updates=["message"])
        logger.info(f"Telegram bot started as id {self.bot_id}, bound to chat {self.chat_id}")

        self.game.on(self.handle_event)
        if self.watcher is not None:
            await self.watcher.start()
        await self.game.start()

        if self.roster is not None:
            self._bootstrap_task = asyncio.create_task(self._bootstrap_roster())

    async def stop(self):
        """Tear everything down once; later calls return immediately."""
        if self._stopping:
            return
        self._stopping = True
        logger.info("Stopping relay session...")

        try:
            if self._bootstrap_task and not self._bootstrap_task.done():
                self._bootstrap_task.cancel()
                try:
                    await self._bootstrap_task
                except asyncio.CancelledError:
                    pass
            if self.watcher is not None:
                await self.watcher.stop()
            if self.app is not None:
                if self.app.updater and self.app.updater.running:
                    await self.app.updater.stop()
                if self.app.running:
                    await self.app.stop()
                await self.app.shutdown()
            await self.game.stop()
        finally:
            self._closed.set()
            logger.info("Relay session stopped.")

    async def wait_closed(self):
        await self._closed.wait()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    async def _bootstrap_roster(self):
        try:
            await self.roster.bootstrap(self.game, timeout=self.settings.roster_timeout)
        except RosterTimeout as e:
            logger.error(f"Roster bootstrap failed: {e}")
        except GameClientClosed as e:
            logger.warning(f"Roster bootstrap skipped: {e}")

    # ── Telegram → game ──

    async def handle_message(self, message: InboundMessage) -> Optional[str]:
        """Relay one Telegram message to the server.

        This is the single entry point for inbound messages, so the
        self-authorship check here covers every path back into the game.

        Returns:
            The command sent, or None if the message was not relayed.
        """
        if str(message.chat_id) != self.chat_id:
            return None
        if is_self_authored(message, self.bot_id):
            logger.debug(f"Ignoring own message {message.message_id}")
            return None
        if self.roster is not None and len(self.roster) == 0:
            logger.debug(f"Nobody online, not relaying message {message.message_id}")
            return None

        command = build_command(
            is_from_platform=True,
            author=display_name(message, self.bot_id),
            content=extract_text(message, self.bot_id),
            reply=resolve_reply(message, self.bot_id),
        )
        await self.game.send(command)
        return command

    async def _on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        msg = update.effective_message
        if msg is None:
            return
        await self.handle_message(from_telegram(msg))

    async def _cmd_chatid(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.effective_message.reply_text(str(update.effective_chat.id))

    async def _cmd_list(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.effective_message.reply_text(format_roster(self.roster), parse_mode=ParseMode.HTML)

    async def _handle_error(self, update: object, context: ContextTypes.DEFAULT_TYPE):
        """Handle errors in update processing."""
        error = context.error
        if update:
            logger.error(f"Telegram error processing update {type(update).__name__}: {type(error).__name__}: {error}", exc_info=error)
        else:
            logger.error(f"Telegram error (no update): {type(error).__name__}: {error}", exc_info=error)

    # ── game → Telegram ──

    async def handle_event(self, event: GameEvent):
        """Announce one game event in the bound chat."""
        if isinstance(event, Closed):
            logger.info("Server closed, shutting down")
            await self.stop()
            return
        if isinstance(event, Join) and event.vanilla != (self.server_type == DEFAULT_TYPE):
            return
        text = format_event(event, self.roster)
        if text:
            await self.send(text)

    async def send(self, text: str):
        await self.app.bot.send_message(chat_id=self.chat_id, text=text, parse_mode=ParseMode.HTML)

    async def _announce_update(self, version: str):
        await self.send(format_update(version))
