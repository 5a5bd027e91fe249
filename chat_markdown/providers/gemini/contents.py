"""Gemini API request/response turns (``{"contents": [{"role", "parts"}]}``)."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from chat_markdown.core.types import (
    Conversation,
    Message,
    ParseContext,
    SourceFormat,
)
from chat_markdown.etl.fields import PLACEHOLDER_TITLE, is_present
from chat_markdown.etl.messages import collapse_role
from chat_markdown.etl.pipe import Pipe
from chat_markdown.providers.gemini.schemas import (
    GeminiContentsRecord,
    GeminiPart,
    GeminiTurn,
)

logger = logging.getLogger(__name__)

API_CONVERSATION_ID = "api_conversation_1"


def load_parts(raw_parts: Any) -> list[GeminiPart]:
    """Validate each part on its own; parts that are not objects are dropped."""
    if not isinstance(raw_parts, list):
        return []
    parts: list[GeminiPart] = []
    for raw in raw_parts:
        try:
            parts.append(GeminiPart.model_validate(raw))
        except ValidationError:
            logger.debug("Skipping malformed contents part: %r", raw)
    return parts


class GeminiContentsPipe(Pipe[GeminiContentsRecord]):
    """The whole ``contents`` array is one conversation.

    The payload carries no times, so the conversation is stamped with
    the processing time and its messages stay untimed.
    """

    source_formats = (SourceFormat.GEMINI_CONTENTS,)
    record_schema = GeminiContentsRecord

    def extract(
        self, payload: Any, ctx: ParseContext
    ) -> Iterator[GeminiContentsRecord]:
        if not isinstance(payload, list):
            return
        turns: list[GeminiTurn] = []
        for index, raw in enumerate(payload):
            if not isinstance(raw, dict):
                logger.debug("Skipping malformed contents turn %d", index)
                continue
            try:
                turns.append(
                    GeminiTurn.model_validate({**raw, "parts": load_parts(raw.get("parts"))})
                )
            except ValidationError:
                logger.debug("Skipping malformed contents turn %d", index)
        yield GeminiContentsRecord(turns=turns)

    def transform(
        self, record: GeminiContentsRecord, ctx: ParseContext
    ) -> Conversation | None:
        messages: list[Message] = []
        for turn in record.turns:
            role = collapse_role(turn.role)
            for part in turn.parts or []:
                if not is_present(part.text):
                    continue
                text = str(part.text).strip()
                if text:
                    messages.append(Message(role=role, content=text))
        if not messages:
            return None
        return Conversation(
            id=API_CONVERSATION_ID,
            title=PLACEHOLDER_TITLE,
            create_time=ctx.now,
            update_time=ctx.now,
            messages=tuple(messages),
        )
