"""Extraction records for loosely-structured conversation exports."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class RawConversationRecord(BaseModel):
    """One conversation object plus its run-wide 1-based position.

    The position feeds the synthesized ``conversation_{n}`` id and the
    ``会話 {n}`` placeholder title.
    """

    position: int
    data: dict[str, Any]
