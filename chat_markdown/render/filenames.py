"""Output file naming for per-chat export."""

from __future__ import annotations

import re
from datetime import UTC, tzinfo

from chat_markdown.core.types import Conversation, SourceKind
from chat_markdown.etl.fields import PLACEHOLDER_TITLE

MAX_FILENAME_LENGTH = 100

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")
_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_PLACEHOLDER = re.compile(rf"^{PLACEHOLDER_TITLE}( \d+)?$")


def sanitize_filename(name: str) -> str:
    name = _WHITESPACE.sub("_", name)
    name = _UNSAFE_CHARS.sub("_", name)
    return name[:MAX_FILENAME_LENGTH]


def is_meaningful_title(title: str | None) -> bool:
    """False for empty titles, bare UUIDs and synthesized placeholders."""
    if not title or not title.strip():
        return False
    return not (_UUID.match(title) or _PLACEHOLDER.match(title))


def conversation_filename(
    conversation: Conversation,
    position: int,
    source_kind: SourceKind,
    *,
    tz: tzinfo = UTC,
) -> str:
    """Return the file stem for one conversation.

    *position* is the 1-based index within the export. Titles that carry
    no information fall back to ``{prefix}_{YYYYMMDD}_{HHMM}_{nnn}`` when
    the create time is known, else ``{prefix}_conversation_{nnn}``.
    """
    if is_meaningful_title(conversation.title):
        return sanitize_filename(conversation.title)

    prefix = source_kind.prefix
    if conversation.create_time is not None:
        local = conversation.create_time.astimezone(tz)
        return f"{prefix}_{local:%Y%m%d}_{local:%H%M}_{position:03d}"
    return f"{prefix}_conversation_{position:03d}"


def deduplicate(filename: str, taken: set[str]) -> str:
    """Append ``_2``, ``_3``… before the extension until *filename* is unused."""
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        stem, ext = filename, ""
    candidate = filename
    counter = 2
    while candidate in taken:
        candidate = f"{stem}_{counter}{dot}{ext}"
        counter += 1
    taken.add(candidate)
    return candidate
