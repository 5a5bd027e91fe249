"""Partition conversations into calendar buckets."""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime, tzinfo

from chat_markdown.core.types import Conversation, ExportMode


def period_key(
    conversation: Conversation,
    mode: ExportMode,
    *,
    tz: tzinfo = UTC,
    now: datetime | None = None,
) -> str:
    """``YYYY-MM`` or ``YYYY`` of the create time, else update time, else *now*."""
    moment = conversation.reference_time or now or datetime.now(UTC)
    local = moment.astimezone(tz)
    if mode is ExportMode.PER_YEAR:
        return f"{local.year:04d}"
    return f"{local.year:04d}-{local.month:02d}"


def group_conversations(
    conversations: list[Conversation] | tuple[Conversation, ...],
    mode: ExportMode,
    *,
    tz: tzinfo = UTC,
    now: datetime | None = None,
) -> dict[str, list[Conversation]]:
    """Group by month or year; keys come back in ascending order.

    Conversations keep their input order inside each group.
    """
    if now is None:
        now = datetime.now(UTC)
    groups: defaultdict[str, list[Conversation]] = defaultdict(list)
    for conversation in conversations:
        groups[period_key(conversation, mode, tz=tz, now=now)].append(conversation)
    return dict(sorted(groups.items()))
