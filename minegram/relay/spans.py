"""Rich-text spans: the building blocks of a tellraw document.

Each Span renders to one Minecraft JSON text component. Reply spans carry
hover metadata which is rendered as a show_text hoverEvent.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

# Origin markers shown before the author name
PLATFORM_MARKER = ("[TG] ", "aqua")
GAME_MARKER = ("[MC] ", "green")

_URL_RE = re.compile(r"https?://[^\s<>\"]+")


@dataclass
class Span:
    text: str
    color: str = "white"
    hover_type: Optional[str] = None
    hover_user: Optional[str] = None
    hover_is_from_platform: Optional[bool] = None
    hover_text: list["Span"] = field(default_factory=list)
    underlined: bool = False
    click_url: Optional[str] = None

    def to_component(self) -> dict:
        """Render as a Minecraft JSON text component."""
        comp = {"text": self.text, "color": self.color}
        if self.underlined:
            comp["underlined"] = True
        if self.click_url:
            comp["clickEvent"] = {"action": "open_url", "value": self.click_url}
        if self.hover_type:
            comp["hoverEvent"] = {"action": "show_text", "contents": self._hover_contents()}
        return comp

    def _hover_contents(self) -> list:
        marker = PLATFORM_MARKER if self.hover_is_from_platform else GAME_MARKER
        contents = [
            "",
            {"text": f"{self.hover_type}\n", "color": "gray", "italic": True},
            {"text": marker[0], "color": marker[1]},
            {"text": self.hover_user or "", "color": "yellow"},
            {"text": ": ", "color": "white"},
        ]
        contents.extend(s.to_component() for s in self.hover_text)
        return contents


def _link_span(text: str, url: str) -> Span:
    return Span(text=text, color="aqua", underlined=True, click_url=url)


def _plain_to_spans(text: str, color: str) -> list[Span]:
    spans = []
    pos = 0
    for m in _URL_RE.finditer(text):
        if m.start() > pos:
            spans.append(Span(text=text[pos:m.start()], color=color))
        spans.append(_link_span(m.group(0), m.group(0)))
        pos = m.end()
    if pos < len(text):
        spans.append(Span(text=text[pos:], color=color))
    return spans


def text_to_spans(text: str | None, color: str = "white", links=()) -> list[Span]:
    """Split text into plain spans and clickable link spans.

    Bare URLs are detected in the text. `links` are hidden links
    (objects with start, end and url) whose visible text differs from
    the target; overlapping ones after the first are ignored.
    """
    if not text:
        return []
    spans = []
    pos = 0
    for link in links:
        if link.start < pos or link.end <= link.start:
            continue
        spans.extend(_plain_to_spans(text[pos:link.start], color))
        spans.append(_link_span(text[link.start:link.end], link.url))
        pos = link.end
    spans.extend(_plain_to_spans(text[pos:], color))
    return spans


def as_spans(content: str | list[Span] | None) -> list[Span]:
    """Normalize extractor output (plain text or spans) to spans."""
    if isinstance(content, list):
        return content
    return text_to_spans(content)


def plain_text(spans: list[Span]) -> str:
    """Concatenate the visible text of a span list."""
    return "".join(s.text for s in spans)
