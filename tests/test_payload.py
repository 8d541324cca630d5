"""Tests for tellraw payload composition."""

import json
import re

from minegram.game.events import Chat
from minegram.relay.content import extract_text
from minegram.relay.formatter import format_event
from minegram.relay.message import AttachmentKind
from minegram.relay.payload import COMMAND, build_command, compose, to_command
from minegram.relay.reply import resolve_reply
from minegram.relay.spans import plain_text

from conftest import BOT_ID, bot_message, make_message


def _document(command: str) -> list:
    assert command.startswith(COMMAND)
    return json.loads(command[len(COMMAND):])


class TestCompose:

    def test_plain_message_layout(self):
        spans = compose(True, "Ann", "hello")
        assert plain_text(spans) == "[TG] <Ann> hello"
        assert spans[0].color == "aqua"
        assert spans[2].text == "Ann"

    def test_game_origin_marker(self):
        spans = compose(False, "Steve", "hi")
        assert spans[0].text == "[MC] "

    def test_content_spans_kept_in_order(self):
        content = extract_text(make_message(kind=AttachmentKind.PHOTO, caption="nice"), BOT_ID)
        spans = compose(True, "Ann", content)
        assert [s.text for s in spans[-4:]] == ["[", "PHOTO", "] ", "nice"]

    def test_reply_block_leads(self):
        target = make_message("original", author_id=7, first_name="Bob")
        reply = resolve_reply(make_message("answer", reply_to=target), BOT_ID)
        spans = compose(True, "Ann", "answer", reply)
        assert spans[0].text == "[Reply] "
        assert spans[0].hover_user == "Bob"
        assert plain_text(spans[0].hover_text) == "original"
        assert spans[1].text == "[TG] "

    def test_does_not_mutate_content(self):
        content = extract_text(make_message(kind=AttachmentKind.AUDIO), BOT_ID)
        before = [s.text for s in content]
        compose(True, "Ann", content)
        compose(True, "Ann", content)
        assert [s.text for s in content] == before


class TestToCommand:

    def test_serialized_document(self):
        doc = _document(build_command(True, "Ann", "hello"))
        assert doc[0] == ""
        texts = [c["text"] for c in doc[1:]]
        assert texts == ["[TG] ", "<", "Ann", "> ", "hello"]
        assert all("color" in c for c in doc[1:])

    def test_compact_json_without_escaping(self):
        command = to_command(compose(True, "Zoë", "héllo"))
        assert "Zoë" in command
        assert ", " not in command.split("héllo")[0]

    def test_quotes_are_escaped(self):
        doc = _document(build_command(True, "Ann", 'say "hi"'))
        assert doc[-1]["text"] == 'say "hi"'

    def test_hover_event(self):
        target = make_message("original", author_id=7, first_name="Bob")
        reply = resolve_reply(make_message("answer", reply_to=target), BOT_ID)
        doc = _document(build_command(True, "Ann", "answer", reply))
        hover = doc[1]["hoverEvent"]
        assert hover["action"] == "show_text"
        hover_texts = [c["text"] for c in hover["contents"][1:]]
        assert "Bob" in hover_texts
        assert "original" in hover_texts
        assert "[TG] " in hover_texts

    def test_link_click_event(self):
        doc = _document(build_command(True, "Ann", "go to https://minecraft.net now"))
        link = doc[-2]
        assert link["clickEvent"] == {"action": "open_url", "value": "https://minecraft.net"}
        assert link["underlined"] is True


class TestRoundTrip:

    def test_game_chat_relayed_back_as_reply(self):
        """Game chat posted to Telegram and then replied to keeps the original text."""
        html = format_event(Chat(user="Steve", text="anyone online?"))
        rendered = re.sub(r"<[^>]+>", "", html)
        relayed = bot_message(rendered)

        reply = resolve_reply(make_message("yes!", reply_to=relayed), BOT_ID)
        assert reply.hover_user == "Steve"
        assert reply.hover_text == "anyone online?"
        assert reply.hover_is_from_platform is False

        doc = _document(build_command(True, "Ann", "yes!", reply))
        hover_texts = [c["text"] for c in doc[1]["hoverEvent"]["contents"][1:]]
        assert "[MC] " in hover_texts
        assert "anyone online?" in hover_texts
