"""Version watcher: announce new Minecraft releases.

Polls Mojang's version manifest in the background. The first successful
poll only records the current release; every later change is reported
through the on_update callback.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx

logger = logging.getLogger("minegram.update_checker")

MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"

# Poll interval in seconds
_CHECK_INTERVAL = 3600


async def fetch_latest_release(url: str = MANIFEST_URL) -> Optional[str]:
    """Fetch the latest release id from the version manifest.

    Returns:
        Version string (e.g., "1.21.4") or None on error.
    """
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.get(url, headers={"Accept": "application/json"})
            resp.raise_for_status()
            return resp.json()["latest"]["release"]
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.debug(f"Version check failed: {e}")
    return None


class VersionWatcher:
    """Background poller for new Minecraft versions.

    Usage:
        watcher = VersionWatcher(on_update=announce)
        await watcher.start()
        # ... later ...
        await watcher.stop()
    """

    def __init__(
        self,
        on_update: Callable[[str], Awaitable[None]],
        interval: float = _CHECK_INTERVAL,
        url: str = MANIFEST_URL,
    ):
        self._on_update = on_update
        self.interval = interval
        self.url = url
        self.latest: Optional[str] = None
        self._running = False
        self._task: Optional[asyncio.Task] = None

    async def start(self):
        """Start the polling background task."""
        if self._running:
            logger.warning("Version watcher already running")
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Version watcher started")

    async def stop(self):
        """Stop polling. Safe to call more than once."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Version watcher stopped")

    async def check(self) -> Optional[str]:
        """Poll once. Returns the new version if it changed since the last poll."""
        latest = await fetch_latest_release(self.url)
        if latest is None:
            return None
        if self.latest is None:
            self.latest = latest
            logger.debug(f"Current Minecraft release: {latest}")
            return None
        if latest == self.latest:
            return None
        self.latest = latest
        logger.info(f"New Minecraft release: {latest}")
        await self._on_update(latest)
        return latest

    async def _run_loop(self):
        while self._running:
            try:
                await self.check()
            except Exception as e:
                logger.error(f"Version watcher error: {type(e).__name__}: {e}", exc_info=True)
            await asyncio.sleep(self.interval)
