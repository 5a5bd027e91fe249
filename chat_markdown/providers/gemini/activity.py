"""Gemini "My Activity" export (``MyActivity.json`` / ``マイアクティビティ.json``).

Every entry is one prompt with its rendered reply, listed newest first.
Each entry becomes its own two-message conversation, numbered oldest
first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from chat_markdown.core.types import (
    Conversation,
    Message,
    ParseContext,
    Role,
    SourceFormat,
)
from chat_markdown.etl.fields import placeholder_title
from chat_markdown.etl.html import strip_html
from chat_markdown.etl.pipe import Pipe
from chat_markdown.etl.timestamps import to_datetime
from chat_markdown.providers.gemini.schemas import (
    GeminiActivityEntry,
    GeminiActivityRecord,
)

logger = logging.getLogger(__name__)

SENT_MESSAGE_PREFIX = "送信したメッセージ:"
TITLE_MAX_LENGTH = 50


def user_text_from_title(title: Any) -> str:
    if not isinstance(title, str):
        return ""
    if title.startswith(SENT_MESSAGE_PREFIX):
        title = title[len(SENT_MESSAGE_PREFIX) :]
    return title.strip()


def title_from_prompt(prompt: str, position: int) -> str:
    if not prompt:
        return placeholder_title(position)
    if len(prompt) > TITLE_MAX_LENGTH:
        return prompt[:TITLE_MAX_LENGTH] + "..."
    return prompt


class GeminiActivityPipe(Pipe[GeminiActivityRecord]):
    source_formats = (SourceFormat.GEMINI_ACTIVITY,)
    record_schema = GeminiActivityRecord

    def extract(
        self, payload: Any, ctx: ParseContext
    ) -> Iterator[GeminiActivityRecord]:
        if not isinstance(payload, list):
            return
        for index, raw in enumerate(reversed(payload)):
            try:
                entry = GeminiActivityEntry.model_validate(raw)
            except ValidationError:
                logger.debug("Skipping malformed activity entry %d", index + 1)
                continue

            reply = ""
            if entry.safe_html_items:
                html = entry.safe_html_items[0].html
                if isinstance(html, str):
                    reply = strip_html(html)

            yield GeminiActivityRecord(
                position=index + 1,
                user_text=user_text_from_title(entry.title),
                reply_text=reply,
                time=to_datetime(entry.time),
            )

    def transform(
        self, record: GeminiActivityRecord, ctx: ParseContext
    ) -> Conversation | None:
        messages: list[Message] = []
        if record.user_text:
            messages.append(
                Message(role=Role.USER, content=record.user_text, timestamp=record.time)
            )
        if record.reply_text.strip():
            messages.append(
                Message(
                    role=Role.ASSISTANT,
                    content=record.reply_text.strip(),
                    timestamp=record.time,
                )
            )
        if not messages:
            return None

        return Conversation(
            id=f"gemini_activity_{record.position}",
            title=title_from_prompt(record.user_text, record.position),
            create_time=record.time,
            update_time=record.time,
            messages=tuple(messages),
        )
