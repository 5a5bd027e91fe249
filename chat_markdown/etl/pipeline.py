"""Normalization entry points: JSON text in, canonical conversations out."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from chat_markdown.core.exceptions import FormatError
from chat_markdown.core.types import (
    Conversation,
    ParseContext,
    ParseResult,
    SourceKind,
)
from chat_markdown.etl.detect import detect_from_filename, detect_shape
from chat_markdown.providers.registry import get_pipe

logger = logging.getLogger(__name__)


def normalize(
    raw_text: str | bytes, file_name: str = "", *, now: datetime | None = None
) -> ParseResult:
    """Decode *raw_text* as JSON and normalize it.

    Args:
        raw_text: Contents of the export file.
        file_name: Original file name, used as a source hint.
        now: Processing time for formats that carry no timestamps.

    Returns:
        A :class:`ParseResult`; zero conversations is not an error.

    Raises:
        FormatError: If *raw_text* is not well-formed JSON or is nested
            too deeply to decode.
    """
    try:
        data = json.loads(raw_text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FormatError(file_name, str(exc)) from exc
    except RecursionError as exc:
        raise FormatError(file_name, "JSON nesting too deep") from exc
    return normalize_document(data, file_name, now=now)


def normalize_document(
    data: Any, file_name: str = "", *, now: datetime | None = None
) -> ParseResult:
    """Run detection and parsing on an already-decoded JSON value. Never raises."""
    ctx = ParseContext(file_name=file_name)
    if now is not None:
        ctx.now = now

    tentative = detect_from_filename(file_name)
    if tentative is not None:
        ctx.source_kind = tentative

    detection = detect_shape(data)
    if detection.source_kind is not None:
        if tentative is not None and tentative != detection.source_kind:
            logger.info(
                "Content looks like %s; overriding file-name guess %s",
                detection.source_kind,
                tentative,
            )
        ctx.source_kind = detection.source_kind

    conversations: list[Conversation] = []
    if detection.payloads:
        pipe = get_pipe(detection.source_format)()
        for payload in detection.payloads:
            conversations.extend(pipe.run(payload, ctx))

    if ctx.source_kind is SourceKind.AI and any(c.from_mapping for c in conversations):
        ctx.source_kind = SourceKind.CHATGPT

    logger.info(
        "Detected %s (%s): %d conversations",
        detection.source_format,
        ctx.source_kind,
        len(conversations),
    )
    return ParseResult(
        conversations=tuple(conversations),
        source_kind=ctx.source_kind,
        source_format=detection.source_format,
    )
