"""Minegram configuration management."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError

logger = logging.getLogger("minegram.config")


class BridgeSettings(BaseSettings):
    """Settings loaded from environment variables, .env, or a JSON config file."""

    # Telegram
    token: Optional[str] = Field(default=None, description="Telegram bot token")
    chat_id: Optional[str] = Field(default=None, description="Bound Telegram chat id")

    # Features
    allow_list: bool = Field(default=False, description="Track online players and enable /list")
    post_updates: bool = Field(default=False, description="Announce new Minecraft releases")

    # Game server
    server_type: str = Field(default="default", description="Server flavour (default, bukkit, ...)")
    server_command: str = Field(
        default="java -Xmx1024M -Xms1024M -jar server.jar nogui",
        description="Command line that launches the server",
    )
    server_cwd: Optional[str] = Field(default=None, description="Working directory of the server")

    # Timers (seconds)
    roster_timeout: float = Field(default=300.0, description="Max wait for the initial /list reply")
    update_interval: float = Field(default=3600.0, description="Version manifest poll interval")

    model_config = {"env_prefix": "MINEGRAM_", "env_file": ".env", "extra": "ignore"}

    @field_validator("chat_id", mode="before")
    @classmethod
    def _chat_id_as_str(cls, value):
        """Accept numeric chat ids (common in JSON configs)."""
        if isinstance(value, int):
            return str(value)
        return value


def load_config_file(name: str) -> Optional[dict]:
    """Read ``<name>.json`` relative to the working directory.

    Returns None when the file does not exist; any other failure
    (unreadable file, invalid JSON) propagates.
    """
    path = Path(f"{name}.json").resolve()
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return data


def load_settings(config_name: Optional[str] = None) -> BridgeSettings:
    """Load settings; values from the JSON config file override the environment."""
    overrides = {}
    if config_name:
        data = load_config_file(config_name)
        if data is None:
            logger.warning(f"Config file {config_name}.json not found, using environment only")
        else:
            logger.info(f"Loaded config file {config_name}.json")
            overrides = data

    settings = BridgeSettings(**overrides)

    if not settings.token:
        raise ConfigError("No Telegram bot token configured (MINEGRAM_TOKEN)")
    if not settings.chat_id:
        raise ConfigError("No Telegram chat id configured (MINEGRAM_CHAT_ID)")

    return settings
