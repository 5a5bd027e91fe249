"""Field-name precedence lists and their resolution functions.

Exports from different services name the same concept differently.
Each resolver walks one precedence list and takes the first *present*
value: anything except ``None``, ``False``, zero, NaN and the empty
string. Empty lists and objects count as present.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from chat_markdown.etl.timestamps import to_datetime

CONVERSATION_ID_FIELDS = ("id", "conversation_id", "chat_id", "uuid")
CONVERSATION_TITLE_FIELDS = ("title", "name")
CONVERSATION_CREATE_FIELDS = ("create_time", "created_at", "created", "timestamp")
CONVERSATION_UPDATE_FIELDS = ("update_time", "updated_at", "updated", "modified")
MESSAGE_CONTAINER_FIELDS = ("messages", "mapping", "content", "history")

MESSAGE_TIMESTAMP_FIELDS = ("create_time", "created_at", "timestamp", "time", "date")

PLACEHOLDER_TITLE = "会話"


def placeholder_title(position: int) -> str:
    return f"{PLACEHOLDER_TITLE} {position}"


def is_present(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, str):
        return value != ""
    if isinstance(value, int | float):
        return value != 0 and not math.isnan(value)
    return True


def first_present(record: Mapping[str, Any], fields: Sequence[str]) -> Any:
    """Return the first present value of *fields* in *record*, or ``None``."""
    for name in fields:
        value = record.get(name)
        if is_present(value):
            return value
    return None


def first_list(record: Mapping[str, Any], fields: Sequence[str]) -> list[Any] | None:
    """Return the first list-typed value of *fields* in *record*, or ``None``."""
    for name in fields:
        value = record.get(name)
        if isinstance(value, list):
            return value
    return None


def as_text(value: Any) -> str | None:
    """Coerce an identifier-like scalar to text; containers yield ``None``."""
    if not is_present(value) or isinstance(value, Mapping | list):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Conversation-level resolvers
# ---------------------------------------------------------------------------


def resolve_conversation_id(record: Mapping[str, Any]) -> str | None:
    """``id | conversation_id | chat_id | uuid | current_node``.

    The mapping-derived and synthesized fallbacks are applied by the caller.
    """
    found = as_text(first_present(record, CONVERSATION_ID_FIELDS))
    if found:
        return found
    return as_text(record.get("current_node"))


def resolve_title(record: Mapping[str, Any], fallback: str) -> str:
    title = as_text(first_present(record, CONVERSATION_TITLE_FIELDS))
    return title if title else fallback


def resolve_create_time(
    record: Mapping[str, Any], fields: Sequence[str] = CONVERSATION_CREATE_FIELDS
) -> datetime | None:
    return to_datetime(first_present(record, fields))


def resolve_update_time(
    record: Mapping[str, Any], fields: Sequence[str] = CONVERSATION_UPDATE_FIELDS
) -> datetime | None:
    return to_datetime(first_present(record, fields))


def resolve_message_container(
    record: Mapping[str, Any], fields: Sequence[str] = MESSAGE_CONTAINER_FIELDS
) -> list[Any]:
    return first_list(record, fields) or []
