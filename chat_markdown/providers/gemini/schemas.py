"""Pydantic schemas for Gemini exports (My Activity, Takeout, API turns)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Raw archive schemas
# ---------------------------------------------------------------------------


class SafeHtmlItem(BaseModel):
    html: Any = None


class GeminiActivityEntry(BaseModel):
    """One ``MyActivity.json`` entry: a prompt and its rendered reply."""

    model_config = ConfigDict(populate_by_name=True)

    header: Any = None
    title: Any = None
    safe_html_items: list[SafeHtmlItem] | None = Field(None, alias="safeHtmlItem")
    time: Any = None


class GeminiPart(BaseModel):
    text: Any = None


class GeminiTurn(BaseModel):
    role: str | None = None
    parts: list[GeminiPart] | None = None


# ---------------------------------------------------------------------------
# Extraction output records (E→T contract)
# ---------------------------------------------------------------------------


class GeminiActivityRecord(BaseModel):
    """A single question/answer pair flattened from an activity entry."""

    position: int
    user_text: str
    reply_text: str
    time: datetime | None = None


class GeminiContentsRecord(BaseModel):
    turns: list[GeminiTurn]
