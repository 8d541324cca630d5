"""Game client: runs the Minecraft server and tails its console.

Usage:
    game = GameClient("java -jar server.jar nogui", cwd="/srv/mc")
    game.on(handler)           # async handler(event)
    await game.start()
    await game.send("list")
    # ... later ...
    await game.stop()

Events are dispatched one at a time, in console order, from a single
reader task. When the process exits a Closed event is dispatched last.
"""

import asyncio
import logging
import shlex
from typing import Awaitable, Callable, Optional

from ..errors import GameClientClosed
from .events import Closed, GameEvent
from .parser import parse_line

logger = logging.getLogger("minegram.game")

EventHandler = Callable[[GameEvent], Awaitable[None]]

# Seconds to wait for a clean shutdown after `stop` before terminating
_STOP_GRACE = 30.0

# Longest console line kept; NBT and command-feedback dumps can run long
_LINE_LIMIT = 1024 * 1024


class GameClient:
    """Minecraft server process wrapper."""

    def __init__(
        self,
        command: str | list[str],
        cwd: Optional[str] = None,
        stop_grace: float = _STOP_GRACE,
        line_limit: int = _LINE_LIMIT,
    ):
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.cwd = cwd
        self.stop_grace = stop_grace
        self.line_limit = line_limit
        self._handlers: list[EventHandler] = []
        self._process: Optional[asyncio.subprocess.Process] = None
        self._reader: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.returncode is None

    def on(self, handler: EventHandler):
        """Subscribe an async handler to every event."""
        self._handlers.append(handler)

    def off(self, handler: EventHandler):
        if handler in self._handlers:
            self._handlers.remove(handler)

    async def start(self):
        """Launch the server process and start reading its console."""
        if self._process is not None:
            logger.warning("Game client already started")
            return
        logger.info(f"Starting server: {shlex.join(self.command)}")
        self._process = await asyncio.create_subprocess_exec(
            *self.command,
            cwd=self.cwd,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            limit=self.line_limit,
        )
        self._reader = asyncio.create_task(self._read_loop())

    async def send(self, command: str):
        """Write one console command to the server."""
        if not self.running or self._process.stdin is None:
            raise GameClientClosed(f"Server is not running, dropped command: {command[:80]}")
        logger.debug(f"> {command}")
        self._process.stdin.write((command + "\n").encode("utf-8"))
        await self._process.stdin.drain()

    async def stop(self):
        """Ask the server to stop, terminating it if it does not exit in time."""
        if self.running:
            try:
                await self.send("stop")
                await asyncio.wait_for(self._process.wait(), timeout=self.stop_grace)
            except GameClientClosed:
                pass
            except asyncio.TimeoutError:
                logger.warning(f"Server did not stop within {self.stop_grace:.0f}s, terminating")
                self._process.terminate()
                await self._process.wait()
        # The reader dispatches Closed, whose handlers may call stop()
        if self._reader and self._reader is not asyncio.current_task():
            await self._reader

    async def _read_loop(self):
        """Read console lines until EOF, then report the exit.

        Closed is dispatched even when reading fails, so subscribers always
        see the end of the session.
        """
        stdout = self._process.stdout
        try:
            while True:
                try:
                    raw = await stdout.readline()
                except ValueError as e:
                    # Line longer than line_limit; the buffered part is dropped
                    logger.warning(f"Skipped oversized console line: {e}")
                    continue
                if not raw:
                    break
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                logger.debug(f"< {line}")
                event = parse_line(line)
                if event is not None:
                    await self._dispatch(event)
        except Exception as e:
            logger.error(f"Console reader failed: {type(e).__name__}: {e}", exc_info=True)
            if self.running:
                self._process.terminate()

        returncode = await self._process.wait()
        logger.info(f"Server process exited with code {returncode}")
        await self._dispatch(Closed(returncode=returncode))

    async def _dispatch(self, event: GameEvent):
        for handler in list(self._handlers):
            try:
                await handler(event)
            except Exception as e:
                logger.error(f"Handler failed for {type(event).__name__}: {type(e).__name__}: {e}", exc_info=True)
