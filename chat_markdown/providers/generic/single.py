"""A bare conversation object at the top level of the file."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from chat_markdown.core.types import Conversation, ParseContext, SourceFormat
from chat_markdown.etl.fields import (
    PLACEHOLDER_TITLE,
    as_text,
    first_present,
    resolve_create_time,
    resolve_message_container,
    resolve_title,
    resolve_update_time,
)
from chat_markdown.etl.pipe import Pipe
from chat_markdown.providers.generic.conversations import normalize_messages
from chat_markdown.providers.generic.schemas import RawConversationRecord

SINGLE_CONVERSATION_ID = "conversation_1"
SINGLE_CREATE_FIELDS = ("create_time", "created_at")
SINGLE_UPDATE_FIELDS = ("update_time", "updated_at")
SINGLE_CONTAINER_FIELDS = ("messages", "content", "history")


class SingleConversationPipe(Pipe[RawConversationRecord]):
    source_formats = (SourceFormat.SINGLE_CONVERSATION,)
    record_schema = RawConversationRecord

    def extract(
        self, payload: Any, ctx: ParseContext
    ) -> Iterator[RawConversationRecord]:
        if isinstance(payload, Mapping):
            yield RawConversationRecord(
                position=ctx.reserve_positions(1), data=dict(payload)
            )

    def transform(
        self, record: RawConversationRecord, ctx: ParseContext
    ) -> Conversation | None:
        data = record.data
        messages = normalize_messages(
            resolve_message_container(data, SINGLE_CONTAINER_FIELDS)
        )
        if not messages:
            return None
        return Conversation(
            id=as_text(first_present(data, ("id",))) or SINGLE_CONVERSATION_ID,
            title=resolve_title(data, PLACEHOLDER_TITLE),
            create_time=resolve_create_time(data, SINGLE_CREATE_FIELDS),
            update_time=resolve_update_time(data, SINGLE_UPDATE_FIELDS),
            messages=tuple(messages),
        )
