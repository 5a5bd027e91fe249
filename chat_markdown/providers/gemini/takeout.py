"""Google Takeout style chat list (``{"chats": [...]}`` or ``{"history": [...]}``)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from chat_markdown.core.types import Conversation, ParseContext, SourceFormat
from chat_markdown.etl.fields import (
    as_text,
    first_present,
    placeholder_title,
    resolve_create_time,
    resolve_message_container,
    resolve_title,
    resolve_update_time,
)
from chat_markdown.etl.pipe import Pipe
from chat_markdown.providers.generic.conversations import normalize_messages
from chat_markdown.providers.generic.schemas import RawConversationRecord

TAKEOUT_CREATE_FIELDS = ("createTime", "created")
TAKEOUT_UPDATE_FIELDS = ("updateTime", "modified")
TAKEOUT_CONTAINER_FIELDS = ("messages", "contents", "turns")


class GeminiTakeoutPipe(Pipe[RawConversationRecord]):
    source_formats = (SourceFormat.GEMINI_TAKEOUT,)
    record_schema = RawConversationRecord

    def extract(
        self, payload: Any, ctx: ParseContext
    ) -> Iterator[RawConversationRecord]:
        if not isinstance(payload, list):
            return
        start = ctx.reserve_positions(len(payload))
        for offset, chat in enumerate(payload):
            if isinstance(chat, Mapping):
                yield RawConversationRecord(position=start + offset, data=dict(chat))

    def transform(
        self, record: RawConversationRecord, ctx: ParseContext
    ) -> Conversation | None:
        chat = record.data
        messages = normalize_messages(
            resolve_message_container(chat, TAKEOUT_CONTAINER_FIELDS)
        )
        if not messages:
            return None
        return Conversation(
            id=as_text(first_present(chat, ("id",))) or f"chat_{record.position}",
            title=resolve_title(chat, placeholder_title(record.position)),
            create_time=resolve_create_time(chat, TAKEOUT_CREATE_FIELDS),
            update_time=resolve_update_time(chat, TAKEOUT_UPDATE_FIELDS),
            messages=tuple(messages),
        )
