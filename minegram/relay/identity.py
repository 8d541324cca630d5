"""Message identity: who wrote a message, and was it us?

Messages the bot itself posted were relayed from the game, and their text
starts with the in-game username ("Steve hello there"). Those must never be
sent back to the server, and their display name is the embedded username
rather than the bot's Telegram name.
"""

from .message import InboundMessage


def is_self_authored(message: InboundMessage, bot_id) -> bool:
    """True if the message was posted by the bridge bot."""
    if message.author is None:
        return False
    return str(message.author.id) == str(bot_id)


def game_username(text: str | None) -> str:
    """First space-delimited token of a relayed game message."""
    if not text:
        return ""
    return text.split(" ")[0]


def strip_game_username(text: str | None) -> str:
    """Drop the leading username token from a relayed game message."""
    if not text:
        return ""
    return " ".join(text.split(" ")[1:])


def display_name(message: InboundMessage, bot_id) -> str:
    """Human-readable author name; empty when the author is unknown."""
    if is_self_authored(message, bot_id):
        return game_username(message.text)
    author = message.author
    if author is None:
        return ""
    if author.last_name:
        return f"{author.first_name} {author.last_name}"
    return author.first_name or ""
