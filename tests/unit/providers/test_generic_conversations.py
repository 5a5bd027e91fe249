from __future__ import annotations

from datetime import UTC, datetime

from chat_markdown.core.types import ParseContext, Role
from chat_markdown.providers.generic import (
    ConversationArrayPipe,
    SingleConversationPipe,
)
from tests.conftest import CHATGPT_CONVERSATIONS


def _run_array(payload, ctx: ParseContext | None = None):
    return list(ConversationArrayPipe().run(payload, ctx or ParseContext()))


class TestConversationArrayPipe:
    def test_chatgpt_export(self):
        conversations = _run_array(CHATGPT_CONVERSATIONS)

        assert [c.id for c in conversations] == ["conv-001", "a"]
        assert [c.title for c in conversations] == ["Trip planning", "会話 2"]
        assert all(c.from_mapping for c in conversations)
        assert len(conversations[0].messages) == 3
        assert conversations[0].create_time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
        assert conversations[0].update_time == datetime(2023, 11, 14, 22, 23, 20, tzinfo=UTC)

    def test_plain_messages(self):
        payload = [
            {
                "id": "c1",
                "title": "T",
                "messages": [
                    {"role": "user", "content": "Hi"},
                    {"role": "model", "content": "Hello"},
                ],
            }
        ]
        conversation = _run_array(payload)[0]
        assert conversation.from_mapping is False
        assert [(m.role, m.content) for m in conversation.messages] == [
            (Role.USER, "Hi"),
            (Role.ASSISTANT, "Hello"),
        ]

    def test_synthesized_id_and_title(self):
        conversation = _run_array([{}, {"history": [{"text": "x"}]}])[0]
        assert conversation.id == "conversation_2"
        assert conversation.title == "会話 2"

    def test_alternate_field_names(self):
        payload = [
            {
                "chat_id": "ch-9",
                "name": "Named",
                "created_at": "2024-04-01T00:00:00Z",
                "updated": "2024-04-02T00:00:00Z",
                "content": [{"sender": "bot", "message": "beep"}],
            }
        ]
        conversation = _run_array(payload)[0]
        assert conversation.id == "ch-9"
        assert conversation.title == "Named"
        assert conversation.create_time == datetime(2024, 4, 1, tzinfo=UTC)
        assert conversation.update_time == datetime(2024, 4, 2, tzinfo=UTC)
        assert conversation.messages[0].role is Role.ASSISTANT

    def test_titled_conversation_without_messages_kept(self):
        conversation = _run_array([{"id": "x", "title": "Only a title"}])[0]
        assert conversation.messages == ()

    def test_untitled_empty_conversation_dropped(self):
        assert _run_array([{"id": "x", "messages": []}]) == []

    def test_non_object_entries_skipped(self):
        conversations = _run_array(["junk", 3, None, {"messages": [{"text": "t"}]}])
        assert [c.id for c in conversations] == ["conversation_4"]

    def test_list_mapping_used_as_container(self):
        conversation = _run_array([{"mapping": [{"role": "user", "text": "listed"}]}])[0]
        assert conversation.from_mapping is False
        assert conversation.messages[0].content == "listed"

    def test_positions_continue_across_payloads(self):
        ctx = ParseContext()
        pipe = ConversationArrayPipe()
        first = list(pipe.run([{"messages": [{"text": "a"}]}], ctx))
        second = list(pipe.run([{"messages": [{"text": "b"}]}], ctx))
        assert first[0].id == "conversation_1"
        assert second[0].id == "conversation_2"

    def test_non_list_payload(self):
        assert _run_array({"not": "a list"}) == []


class TestSingleConversationPipe:
    def test_single_object(self):
        data = {
            "title": "Solo",
            "create_time": 1700000000,
            "messages": [{"role": "user", "content": "alone"}],
        }
        conversations = list(SingleConversationPipe().run(data, ParseContext()))

        assert len(conversations) == 1
        conversation = conversations[0]
        assert conversation.id == "conversation_1"
        assert conversation.title == "Solo"
        assert conversation.create_time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)

    def test_explicit_id_and_placeholder_title(self):
        data = {"id": "s-1", "content": [{"role": "assistant", "text": "x"}]}
        conversation = next(SingleConversationPipe().run(data, ParseContext()))
        assert conversation.id == "s-1"
        assert conversation.title == "会話"

    def test_no_messages_no_conversation(self):
        data = {"title": "Empty", "content": "just a string"}
        assert list(SingleConversationPipe().run(data, ParseContext())) == []
