from __future__ import annotations

from datetime import UTC, datetime

from chat_markdown.core.types import ParseContext, Role
from chat_markdown.providers.gemini.activity import (
    GeminiActivityPipe,
    title_from_prompt,
    user_text_from_title,
)
from tests.conftest import GEMINI_ACTIVITY


def _run(payload):
    pipe = GeminiActivityPipe()
    return pipe, list(pipe.run(payload, ParseContext(file_name="MyActivity.json")))


class TestActivityHelpers:
    def test_prefix_stripped(self):
        assert user_text_from_title("送信したメッセージ:  Hello ") == "Hello"

    def test_title_without_prefix_kept(self):
        assert user_text_from_title("Used Gemini Apps") == "Used Gemini Apps"

    def test_missing_title(self):
        assert user_text_from_title(None) == ""

    def test_long_prompt_truncated(self):
        prompt = "x" * 60
        assert title_from_prompt(prompt, 1) == "x" * 50 + "..."

    def test_fifty_characters_not_truncated(self):
        assert title_from_prompt("y" * 50, 1) == "y" * 50

    def test_empty_prompt_placeholder(self):
        assert title_from_prompt("", 4) == "会話 4"


class TestGeminiActivityPipe:
    def test_oldest_entry_first(self):
        _, conversations = _run(GEMINI_ACTIVITY)
        assert [c.id for c in conversations] == [
            "gemini_activity_1",
            "gemini_activity_2",
            "gemini_activity_3",
        ]
        assert [c.title for c in conversations] == [
            "Used Gemini Apps",
            "Hello",
            "What is Python?",
        ]

    def test_prompt_and_reply(self):
        _, conversations = _run(GEMINI_ACTIVITY)
        hello = conversations[1]
        assert [(m.role, m.content) for m in hello.messages] == [
            (Role.USER, "Hello"),
            (Role.ASSISTANT, "Hi there"),
        ]

    def test_reply_html_converted(self):
        _, conversations = _run(GEMINI_ACTIVITY)
        reply = conversations[2].messages[1].content
        assert reply == "Python is a language.\n- Easy\n- Popular"

    def test_entry_without_reply(self):
        _, conversations = _run(GEMINI_ACTIVITY)
        assert len(conversations[0].messages) == 1

    def test_entry_time_shared(self):
        _, conversations = _run(GEMINI_ACTIVITY)
        hello = conversations[1]
        expected = datetime(2024, 1, 1, tzinfo=UTC)
        assert hello.create_time == expected
        assert hello.update_time == expected
        assert all(m.timestamp == expected for m in hello.messages)

    def test_entry_without_text_dropped(self):
        pipe, conversations = _run([{"header": "Gemini Apps", "time": "2024-01-01T00:00:00Z"}])
        assert conversations == []
        assert pipe.extracted_count == 1
        assert pipe.transformed_count == 0

    def test_untitled_reply_gets_placeholder(self):
        payload = [{"header": "Gemini Apps", "safeHtmlItem": [{"html": "<p>Only a reply</p>"}]}]
        _, conversations = _run(payload)
        assert conversations[0].title == "会話 1"
        assert conversations[0].messages[0].role is Role.ASSISTANT

    def test_malformed_entries_skipped(self):
        payload = [
            {"header": "Gemini Apps", "title": "送信したメッセージ: ok"},
            "not an entry",
            {"header": "Gemini Apps", "title": ["bad"]},
        ]
        _, conversations = _run(payload)
        assert [c.title for c in conversations] == ["ok"]

    def test_non_list_payload(self):
        _, conversations = _run({"header": "Gemini Apps"})
        assert conversations == []

    def test_non_string_reply_keeps_prompt(self):
        payload = [
            {
                "header": "Gemini Apps",
                "title": "送信したメッセージ: still here",
                "safeHtmlItem": [{"html": 5}],
            }
        ]
        _, conversations = _run(payload)
        assert [(m.role, m.content) for m in conversations[0].messages] == [
            (Role.USER, "still here")
        ]

    def test_non_string_title_keeps_reply(self):
        payload = [{"header": "Gemini Apps", "title": 7, "safeHtmlItem": [{"html": "<p>Reply</p>"}]}]
        _, conversations = _run(payload)
        assert [(m.role, m.content) for m in conversations[0].messages] == [
            (Role.ASSISTANT, "Reply")
        ]
