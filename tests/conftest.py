from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from chat_markdown.core.types import Conversation, Message, Role

FIXTURES_DIR = Path(__file__).parent / "fixtures"

CHATGPT_DIR = FIXTURES_DIR / "chatgpt"
GEMINI_DIR = FIXTURES_DIR / "gemini"


CHATGPT_CONVERSATIONS: list[dict] = json.loads(
    (CHATGPT_DIR / "conversations.json").read_text(encoding="utf-8")
)

GEMINI_ACTIVITY: list[dict] = json.loads(
    (GEMINI_DIR / "MyActivity.json").read_text(encoding="utf-8")
)

GEMINI_TAKEOUT: dict = json.loads(
    (GEMINI_DIR / "takeout.json").read_text(encoding="utf-8")
)

FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


def make_conversation(
    conversation_id: str = "c1",
    title: str = "Test",
    create_time: datetime | None = None,
    update_time: datetime | None = None,
    messages: list[tuple[str, str]] | None = None,
) -> Conversation:
    """Build a canonical conversation from ``(role, content)`` pairs."""
    pairs = messages if messages is not None else [("user", "Hi"), ("assistant", "Hello")]
    return Conversation(
        id=conversation_id,
        title=title,
        create_time=create_time,
        update_time=update_time,
        messages=tuple(Message(role=Role(role), content=text) for role, text in pairs),
    )


@pytest.fixture()
def chatgpt_export(tmp_path: Path) -> Path:
    """Copy the synthetic ChatGPT export into a temp directory."""
    dest = tmp_path / "conversations.json"
    dest.write_text(json.dumps(CHATGPT_CONVERSATIONS), encoding="utf-8")
    return dest


@pytest.fixture()
def gemini_export(tmp_path: Path) -> Path:
    dest = tmp_path / "MyActivity.json"
    dest.write_text(json.dumps(GEMINI_ACTIVITY, ensure_ascii=False), encoding="utf-8")
    return dest


@pytest.fixture()
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at a throwaway config file with no env overrides."""
    path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("CHAT_MARKDOWN_CONFIG", str(path))
    for name in (
        "CHAT_MARKDOWN_EXPORT_MODE",
        "CHAT_MARKDOWN_OUTPUT_DIR",
        "CHAT_MARKDOWN_TIMEZONE",
    ):
        monkeypatch.delenv(name, raising=False)
    return path
