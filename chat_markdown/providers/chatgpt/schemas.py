"""Pydantic schemas for ChatGPT ``conversations.json`` mapping nodes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Raw archive schemas (model the nested JSON inside ``mapping``)
# ---------------------------------------------------------------------------


class ChatGPTAuthor(BaseModel):
    role: str | None = None


class ChatGPTContent(BaseModel):
    content_type: str | None = None
    parts: list[Any] | None = None
    text: Any = None


class ChatGPTMessage(BaseModel):
    author: ChatGPTAuthor | None = None
    content: ChatGPTContent | str | None = None
    create_time: Any = None


class ChatGPTNode(BaseModel):
    """One entry of a conversation ``mapping``.

    Structural nodes (the synthetic root, pruned branches) carry no
    ``message``.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    message: ChatGPTMessage | None = None
    parent: str | None = None

    @property
    def role(self) -> str | None:
        if self.message is None or self.message.author is None:
            return None
        return self.message.author.role
