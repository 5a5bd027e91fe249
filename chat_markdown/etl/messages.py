"""Map one raw message record of any shape to a canonical :class:`Message`."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from chat_markdown.core.types import Message, Role
from chat_markdown.etl.fields import MESSAGE_TIMESTAMP_FIELDS, first_present, is_present
from chat_markdown.etl.timestamps import to_datetime

logger = logging.getLogger(__name__)

ASSISTANT_SYNONYMS = frozenset({"assistant", "model", "gemini", "ai", "bot"})
USER_SYNONYMS = frozenset({"user", "human"})


def collapse_role(raw: str | None) -> Role:
    """Collapse an external role name onto :class:`Role`.

    Unrecognised names resolve to ``user``.
    """
    if raw and raw.strip().lower() in ASSISTANT_SYNONYMS:
        return Role.ASSISTANT
    return Role.USER


def resolve_role(record: Mapping[str, Any]) -> Role:
    """``role | author (str or .role) | sender | from``, defaulting to ``user``."""
    raw: Any = None
    if is_present(record.get("role")):
        raw = record["role"]
    elif is_present(record.get("author")):
        author = record["author"]
        raw = author.get("role") if isinstance(author, Mapping) else author
    elif is_present(record.get("sender")):
        raw = record["sender"]
    elif is_present(record.get("from")):
        raw = record["from"]
    return collapse_role(raw if isinstance(raw, str) else None)


def join_parts(parts: list[Any], *, strings_only: bool = False) -> str:
    """Join text-bearing parts with newlines.

    Plain strings are kept as-is; objects contribute a present ``text``
    field unless *strings_only* is set.
    """
    texts: list[str] = []
    for part in parts:
        if isinstance(part, str):
            texts.append(part)
        elif (
            not strings_only
            and isinstance(part, Mapping)
            and is_present(part.get("text"))
        ):
            texts.append(_stringify(part["text"]))
    return "\n".join(texts)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def resolve_content(record: Mapping[str, Any]) -> str:
    """Extract message text, trying each known field layout in turn.

    ``content`` (string) → ``content.parts`` → ``content.text`` →
    ``parts`` → ``text`` → ``message`` (JSON-stringified when not text).
    A layout that yields nothing falls through to the next one.
    """
    content = record.get("content")
    candidates: list[Any] = []
    if isinstance(content, str):
        candidates.append(content)
    elif isinstance(content, Mapping):
        parts = content.get("parts")
        if isinstance(parts, list):
            candidates.append(join_parts(parts))
        if is_present(content.get("text")):
            candidates.append(_stringify(content["text"]))

    parts = record.get("parts")
    if isinstance(parts, list):
        candidates.append(join_parts(parts))
    if is_present(record.get("text")):
        candidates.append(_stringify(record["text"]))
    if is_present(record.get("message")):
        candidates.append(_stringify(record["message"]))

    for text in candidates:
        if text.strip():
            return text.strip()
    return ""


def resolve_timestamp(record: Mapping[str, Any]) -> datetime | None:
    return to_datetime(first_present(record, MESSAGE_TIMESTAMP_FIELDS))


def normalize_message(record: Any) -> Message | None:
    """Return a canonical message, or ``None`` when *record* carries no text.

    Never raises.
    """
    if not isinstance(record, Mapping):
        return None
    content = resolve_content(record)
    if not content:
        return None
    return Message(
        role=resolve_role(record),
        content=content,
        timestamp=resolve_timestamp(record),
    )
