"""Timestamp normalization for heterogeneous export fields."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime

logger = logging.getLogger(__name__)

# Numbers above this are treated as millisecond epochs. Second epochs
# from the year 2286 onward are misread as milliseconds; kept as-is.
MAX_SECONDS_EPOCH = 9_999_999_999

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Slash-separated dates; naive, so read as UTC like other naive strings
_SLASH_FORMATS = ("%Y/%m/%d %H:%M:%S", "%Y/%m/%d %H:%M", "%Y/%m/%d")


def to_datetime(value: object) -> datetime | None:
    """Convert an epoch number, date string or datetime to an aware UTC datetime.

    Returns ``None`` for absent, empty or unparseable values. Never raises.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)

    if isinstance(value, bool):
        return None

    if isinstance(value, int | float):
        return _from_epoch(value)

    if isinstance(value, str):
        return _from_string(value.strip())

    return None


def _from_epoch(value: int | float) -> datetime | None:
    if not value or (isinstance(value, float) and not math.isfinite(value)):
        return None
    millis = value if value > MAX_SECONDS_EPOCH else value * 1000
    try:
        return _EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        logger.debug("Epoch value out of range: %r", value)
        return None


def _from_string(text: str) -> datetime | None:
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            parsed = _from_slash_date(text)
            if parsed is None:
                logger.debug("Unparseable timestamp string: %r", text)
                return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        return None


def _from_slash_date(text: str) -> datetime | None:
    for fmt in _SLASH_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_iso(value: datetime) -> str:
    """Format as UTC ISO-8601 with millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
