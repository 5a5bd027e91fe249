"""Conversation-array parsing (ChatGPT ``conversations.json`` and look-alikes)."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from chat_markdown.core.types import (
    Conversation,
    Message,
    ParseContext,
    SourceFormat,
)
from chat_markdown.etl.fields import (
    as_text,
    placeholder_title,
    resolve_conversation_id,
    resolve_create_time,
    resolve_message_container,
    resolve_title,
    resolve_update_time,
)
from chat_markdown.etl.graph import first_user_node_id, resolve_mapping
from chat_markdown.etl.messages import normalize_message
from chat_markdown.etl.pipe import Pipe
from chat_markdown.providers.generic.schemas import RawConversationRecord

logger = logging.getLogger(__name__)


def normalize_messages(raw_messages: list[Any]) -> list[Message]:
    messages: list[Message] = []
    for raw in raw_messages:
        message = normalize_message(raw)
        if message is not None:
            messages.append(message)
    return messages


class ConversationArrayPipe(Pipe[RawConversationRecord]):
    """Parses an array of conversation objects.

    Entries with a ``mapping`` object are rebuilt through the message
    graph; everything else reads the first list-typed message container.
    An entry is kept when it has at least one message or a title.
    """

    source_formats = (
        SourceFormat.CHATGPT_MAPPING,
        SourceFormat.CONVERSATION_ARRAY,
        SourceFormat.CONVERSATIONS_FIELD,
        SourceFormat.GENERIC,
    )
    record_schema = RawConversationRecord

    def extract(
        self, payload: Any, ctx: ParseContext
    ) -> Iterator[RawConversationRecord]:
        if not isinstance(payload, list):
            logger.debug("Expected a conversation array, got %s", type(payload).__name__)
            return
        start = ctx.reserve_positions(len(payload))
        for offset, entry in enumerate(payload):
            if not isinstance(entry, Mapping):
                logger.debug("Skipping non-object conversation entry at %d", offset)
                continue
            yield RawConversationRecord(position=start + offset, data=dict(entry))

    def transform(
        self, record: RawConversationRecord, ctx: ParseContext
    ) -> Conversation | None:
        data = record.data
        mapping = data.get("mapping")
        has_graph = isinstance(mapping, Mapping)

        conversation_id = resolve_conversation_id(data)
        if not conversation_id and has_graph:
            conversation_id = first_user_node_id(mapping)

        if has_graph:
            messages = resolve_mapping(mapping, data.get("current_node"))
        else:
            messages = normalize_messages(resolve_message_container(data))

        if not messages and not as_text(data.get("title")):
            return None

        return Conversation(
            id=conversation_id or f"conversation_{record.position}",
            title=resolve_title(data, placeholder_title(record.position)),
            create_time=resolve_create_time(data),
            update_time=resolve_update_time(data),
            messages=tuple(messages),
            from_mapping=has_graph,
        )
