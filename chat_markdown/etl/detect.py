"""Source detection: file-name cues plus top-level JSON shape.

The file name only gives a tentative :class:`SourceKind`; whenever a
content pattern that implies a service matches, it wins.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chat_markdown.core.types import SourceFormat, SourceKind
from chat_markdown.etl.fields import first_present, is_present

logger = logging.getLogger(__name__)

GEMINI_FILENAME_PATTERNS = (
    "myactivity.json",
    "マイアクティビティ.json",
    "my_activity.json",
    "gemini",
)
CHATGPT_FILENAME_PATTERNS = (
    "conversations.json",
    "chatgpt",
)

CONVERSATION_ITEM_FIELDS = ("messages", "content", "parts", "role")
CONVERSATION_KEY_HINTS = ("conversation", "chat", "message", "history")

MAX_SCAN_DEPTH = 32

# Only Google "My Activity" exports carry rendered replies under this key.
ACTIVITY_REPLY_FIELD = "safeHtmlItem"


@dataclass(frozen=True)
class Detection:
    """Outcome of shape detection.

    ``source_kind`` is ``None`` when the shape says nothing about the
    service, leaving the file-name guess in place. ``payloads`` holds the
    value(s) handed to the format's pipe; only the generic scan yields
    more than one.
    """

    source_format: SourceFormat
    source_kind: SourceKind | None
    payloads: tuple[Any, ...]


def detect_from_filename(file_name: str | None) -> SourceKind | None:
    if not file_name:
        return None
    lower = file_name.lower()
    if any(pattern in lower for pattern in GEMINI_FILENAME_PATTERNS):
        return SourceKind.GEMINI
    if any(pattern in lower for pattern in CHATGPT_FILENAME_PATTERNS):
        return SourceKind.CHATGPT
    return None


def _looks_like_activity(entry: Mapping[str, Any]) -> bool:
    header = entry.get("header")
    if isinstance(header, str) and "Gemini" in header:
        return True
    return ACTIVITY_REPLY_FIELD in entry


def detect_shape(data: Any) -> Detection:
    """Classify a decoded document; the first matching pattern wins."""
    if isinstance(data, list):
        first = data[0] if data else None
        if isinstance(first, Mapping):
            if _looks_like_activity(first):
                return Detection(SourceFormat.GEMINI_ACTIVITY, SourceKind.GEMINI, (data,))
            if is_present(first.get("mapping")):
                return Detection(SourceFormat.CHATGPT_MAPPING, SourceKind.CHATGPT, (data,))
        return Detection(SourceFormat.CONVERSATION_ARRAY, None, (data,))

    if isinstance(data, Mapping):
        if is_present(data.get("conversations")):
            return Detection(
                SourceFormat.CONVERSATIONS_FIELD, None, (data["conversations"],)
            )
        chats = first_present(data, ("chats", "history"))
        if chats is not None:
            return Detection(SourceFormat.GEMINI_TAKEOUT, SourceKind.GEMINI, (chats,))
        if is_present(data.get("messages")) or is_present(data.get("content")):
            return Detection(SourceFormat.SINGLE_CONVERSATION, None, (data,))
        if is_present(data.get("contents")):
            return Detection(
                SourceFormat.GEMINI_CONTENTS, SourceKind.GEMINI, (data["contents"],)
            )

    arrays = find_conversation_arrays(data)
    if not arrays:
        logger.info("No known conversation structure found")
        return Detection(SourceFormat.EMPTY, None, ())
    return Detection(SourceFormat.GENERIC, None, tuple(arrays))


# ---------------------------------------------------------------------------
# Generic scan
# ---------------------------------------------------------------------------


def _looks_like_conversation(item: Any) -> bool:
    return isinstance(item, Mapping) and any(
        is_present(item.get(name)) for name in CONVERSATION_ITEM_FIELDS
    )


def _is_conversation_key(key: Any) -> bool:
    lower = str(key).lower()
    return any(hint in lower for hint in CONVERSATION_KEY_HINTS)


def find_conversation_arrays(data: Any, max_depth: int = MAX_SCAN_DEPTH) -> list[list[Any]]:
    """Depth-first search for arrays that look like conversation lists.

    An array whose first element exposes ``messages``, ``content``,
    ``parts`` or ``role`` is taken as-is; otherwise an array stored under
    a key naming a conversation, chat, message or history is taken.
    Taken arrays are not searched further. Containers deeper than
    *max_depth* or already visited are skipped.
    """
    found: list[list[Any]] = []
    visited: set[int] = set()

    def scan(node: Any, depth: int) -> None:
        if not isinstance(node, list | Mapping):
            return
        if depth > max_depth:
            logger.warning("Generic scan stopped at depth %d", depth)
            return
        if id(node) in visited:
            return
        visited.add(id(node))

        if isinstance(node, list):
            if node and _looks_like_conversation(node[0]):
                found.append(node)
                return
            for item in node:
                scan(item, depth + 1)
            return

        for key, value in node.items():
            if isinstance(value, list) and _is_conversation_key(key):
                if id(value) not in visited:
                    visited.add(id(value))
                    found.append(value)
                continue
            scan(value, depth + 1)

    scan(data, 0)
    return found
