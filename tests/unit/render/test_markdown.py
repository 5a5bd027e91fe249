from __future__ import annotations

from datetime import UTC, datetime

from chat_markdown.core.types import Conversation, Message, Role, SourceKind
from chat_markdown.render.markdown import (
    conversation_to_markdown,
    conversations_to_markdown,
    role_label,
)
from tests.conftest import make_conversation

JAN_1 = datetime(2024, 1, 1, tzinfo=UTC)


class TestConversationToMarkdown:
    def test_full_document(self):
        conv = make_conversation(create_time=JAN_1)
        expected = (
            "---\n"
            'title: "Test"\n'
            'chatgpt_conversation_id: "c1"\n'
            "created_utc: 2024-01-01T00:00:00.000Z\n"
            "---\n\n"
            "# Test\n\n"
            "- Created (UTC): 2024-01-01T00:00:00.000Z\n"
            "\n"
            "---\n\n"
            "## User\n\nHi\n\n"
            "## Assistant\n\nHello\n\n"
        )
        assert conversation_to_markdown(conv, SourceKind.CHATGPT) == expected

    def test_without_times(self):
        md = conversation_to_markdown(make_conversation(), SourceKind.AI)
        assert "created_utc" not in md
        assert "- Created" not in md
        assert md.startswith('---\ntitle: "Test"\nai_conversation_id: "c1"\n---\n\n# Test\n\n---\n\n')

    def test_updated_time(self):
        conv = make_conversation(update_time=datetime(2024, 2, 3, 4, 5, 6, tzinfo=UTC))
        md = conversation_to_markdown(conv, SourceKind.GEMINI)
        assert "updated_utc: 2024-02-03T04:05:06.000Z\n" in md
        assert "- Updated (UTC): 2024-02-03T04:05:06.000Z\n" in md
        assert 'gemini_conversation_id: "c1"' in md

    def test_message_timestamp_line(self):
        conv = Conversation(
            id="c1",
            title="T",
            messages=(Message(role=Role.USER, content="Hi", timestamp=JAN_1),),
        )
        md = conversation_to_markdown(conv, SourceKind.CHATGPT)
        assert "## User\n*Time (UTC): 2024-01-01T00:00:00.000Z*\n\nHi\n\n" in md

    def test_quotes_escaped_in_front_matter(self):
        conv = make_conversation(title='Say "hi"', conversation_id='id"1')
        md = conversation_to_markdown(conv, SourceKind.CHATGPT)
        assert 'title: "Say \\"hi\\""\n' in md
        assert 'chatgpt_conversation_id: "id\\"1"\n' in md
        assert '# Say "hi"\n' in md

    def test_empty_conversation_renders(self):
        md = conversation_to_markdown(make_conversation(messages=[]), SourceKind.AI)
        assert md.endswith("---\n\n")
        assert "## User" not in md


class TestConversationsToMarkdown:
    def test_group_document(self):
        convs = [
            make_conversation("c1", "First", create_time=JAN_1),
            make_conversation("conversation_2", "Second", messages=[("user", "Q")]),
        ]
        md = conversations_to_markdown(convs, "2024-01", SourceKind.CHATGPT)

        assert md.startswith("# ChatGPT 会話履歴 - 2024-01\n\n**会話数**: 2\n\n---\n\n")
        assert "## 1. First\n\n- chatgpt_conversation_id: c1\n" in md
        assert "- Created (UTC): 2024-01-01T00:00:00.000Z\n\n### User\n\nHi\n\n" in md
        assert "## 2. Second\n\n\n### User\n\nQ\n\n---\n\n" in md
        assert "conversation_id: conversation_2" not in md
        assert md.count("---\n\n") == 3

    def test_ai_label(self):
        md = conversations_to_markdown([make_conversation()], "2024", SourceKind.AI)
        assert md.startswith("# AI Chat 会話履歴 - 2024\n")
        assert "- ai_conversation_id: c1\n" in md

    def test_gemini_label(self):
        md = conversations_to_markdown([make_conversation()], "2024", SourceKind.GEMINI)
        assert md.startswith("# Gemini 会話履歴 - 2024\n")


class TestRoleLabel:
    def test_labels(self):
        assert role_label(Role.USER) == "User"
        assert role_label("user") == "User"
        assert role_label(Role.ASSISTANT) == "Assistant"
        assert role_label("tool") == "Assistant"
