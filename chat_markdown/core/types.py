"""Canonical conversation model and per-run value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


class SourceKind(StrEnum):
    """Originating service, used for labels and file-name prefixes."""

    GEMINI = "Gemini"
    CHATGPT = "ChatGPT"
    AI = "AI"

    @property
    def prefix(self) -> str:
        """File-name prefix (``chatgpt``, ``gemini`` or ``ai_chat``)."""
        if self is SourceKind.CHATGPT:
            return "chatgpt"
        if self is SourceKind.GEMINI:
            return "gemini"
        return "ai_chat"

    @property
    def label(self) -> str:
        """Human label used in multi-conversation document headings."""
        return "AI Chat" if self is SourceKind.AI else self.value


class SourceFormat(StrEnum):
    """Recognised top-level JSON shapes."""

    GEMINI_ACTIVITY = "gemini_activity"
    CHATGPT_MAPPING = "chatgpt_mapping"
    CONVERSATION_ARRAY = "conversation_array"
    CONVERSATIONS_FIELD = "conversations_field"
    GEMINI_TAKEOUT = "gemini_takeout"
    SINGLE_CONVERSATION = "single_conversation"
    GEMINI_CONTENTS = "gemini_contents"
    GENERIC = "generic"
    EMPTY = "empty"


class ExportMode(StrEnum):
    PER_CHAT = "per_chat"
    PER_MONTH = "per_month"
    PER_YEAR = "per_year"


# ---------------------------------------------------------------------------
# Canonical model
# ---------------------------------------------------------------------------


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str = Field(min_length=1)
    timestamp: datetime | None = None


class Conversation(BaseModel):
    """A normalized, format-agnostic conversation.

    ``from_mapping`` is set when the messages were rebuilt from a
    ChatGPT-style node mapping; the detector uses it to reclassify runs
    that carried no other source cue.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    create_time: datetime | None = None
    update_time: datetime | None = None
    messages: tuple[Message, ...] = ()
    from_mapping: bool = False

    @property
    def reference_time(self) -> datetime | None:
        return self.create_time or self.update_time


# ---------------------------------------------------------------------------
# Per-run values
# ---------------------------------------------------------------------------


@dataclass
class ParseContext:
    """Mutable state for exactly one :func:`normalize` run.

    A fresh context is built per call, so concurrent runs never share a
    classification.
    """

    file_name: str = ""
    source_kind: SourceKind = SourceKind.AI
    now: datetime = field(default_factory=lambda: datetime.now(UTC))
    next_position: int = 1

    def reserve_positions(self, count: int) -> int:
        """Reserve *count* run-wide 1-based positions and return the first."""
        start = self.next_position
        self.next_position += count
        return start


@dataclass(frozen=True)
class ParseResult:
    """Result returned from :func:`chat_markdown.normalize`."""

    conversations: tuple[Conversation, ...]
    source_kind: SourceKind
    source_format: SourceFormat

    @property
    def message_count(self) -> int:
        return sum(len(c.messages) for c in self.conversations)

    def __len__(self) -> int:
        return len(self.conversations)


@dataclass(frozen=True)
class OutputFile:
    filename: str
    content: str
