"""Telegram HTML helpers.

Outbound messages are sent with parse_mode=HTML, so anything coming from
the game console must be escaped before it is wrapped in tags.
"""

import html as _html


def escape(text) -> str:
    """Escape HTML special characters in plain text segments."""
    return _html.escape(str(text), quote=False)


def code(text) -> str:
    """Wrap text in <code> (monospace), escaping it first."""
    return f"<code>{escape(text)}</code>"


def bold(text) -> str:
    return f"<b>{escape(text)}</b>"
