"""Minegram exception hierarchy."""


class MinegramError(Exception):
    """Base class for all Minegram errors."""
    pass

class ConfigError(MinegramError):
    """Required setting missing or config file unreadable."""
    pass

class RosterTimeout(MinegramError):
    """The server did not answer the roster query in time."""
    pass

class GameClientClosed(MinegramError):
    """Command sent after the server process has exited."""
    pass
