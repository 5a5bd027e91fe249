from __future__ import annotations

import logging
from datetime import UTC, datetime, tzinfo

from chat_markdown.core.exceptions import UnsupportedExportModeError
from chat_markdown.core.types import Conversation, ExportMode, OutputFile, SourceKind
from chat_markdown.render.filenames import conversation_filename, deduplicate
from chat_markdown.render.grouping import group_conversations
from chat_markdown.render.markdown import (
    conversation_to_markdown,
    conversations_to_markdown,
)

logger = logging.getLogger(__name__)


def render(
    conversations: list[Conversation] | tuple[Conversation, ...],
    export_mode: ExportMode | str,
    source_kind: SourceKind | str,
    *,
    tz: tzinfo = UTC,
    now: datetime | None = None,
) -> list[OutputFile]:
    """Render conversations to Markdown files.

    Args:
        conversations: Canonical conversations from :func:`normalize`.
        export_mode: One file per chat, per month or per year.
        source_kind: Detected service; selects labels and file prefixes.
        tz: Time zone for calendar fields (grouping keys, file-name dates).
        now: Fallback date for conversations without any timestamp.

    Raises:
        UnsupportedExportModeError: If *export_mode* is not an
            :class:`ExportMode` value.
        ValueError: If *source_kind* is not a :class:`SourceKind` value.
    """
    try:
        mode = ExportMode(export_mode)
    except ValueError as exc:
        raise UnsupportedExportModeError(export_mode) from exc
    source_kind = SourceKind(source_kind)

    files: list[OutputFile] = []
    if mode is ExportMode.PER_CHAT:
        taken: set[str] = set()
        for position, conversation in enumerate(conversations, start=1):
            stem = conversation_filename(conversation, position, source_kind, tz=tz)
            files.append(
                OutputFile(
                    filename=deduplicate(f"{stem}.md", taken),
                    content=conversation_to_markdown(conversation, source_kind),
                )
            )
    else:
        groups = group_conversations(conversations, mode, tz=tz, now=now)
        for period, members in groups.items():
            files.append(
                OutputFile(
                    filename=f"{source_kind.prefix}_{period}.md",
                    content=conversations_to_markdown(members, period, source_kind),
                )
            )

    logger.info("Rendered %d files (%s)", len(files), mode)
    return files
