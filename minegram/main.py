"""Minegram: Main entry point."""

import asyncio
import logging
import os
from typing import Optional

from .config import load_settings
from .game.client import GameClient
from .relay.session import RelaySession

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_log_file = os.path.expanduser("~/minegram.log")

logging.basicConfig(
    level=logging.INFO,
    format=_log_format,
    handlers=[
        logging.StreamHandler(),                          # stderr (console)
        logging.FileHandler(_log_file, encoding="utf-8"), # ~/minegram.log
    ],
)
# python-telegram-bot logs every getUpdates call at INFO through httpx
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger("minegram")


async def run(config_name: Optional[str] = None):
    """Main run loop: relay until the server exits or we are interrupted."""
    settings = load_settings(config_name)
    game = GameClient(settings.server_command, cwd=settings.server_cwd)
    session = RelaySession(settings, game)

    try:
        await session.start()
        logger.info("Minegram is running. Press Ctrl+C to stop.")
        await session.wait_closed()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    except Exception as e:
        logger.critical(f"Fatal error: {type(e).__name__}: {e}", exc_info=True)
    finally:
        await session.stop()


def main():
    """Entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
