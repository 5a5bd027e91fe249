"""Markdown rendering of canonical conversations."""

from __future__ import annotations

from chat_markdown.core.types import Conversation, Message, Role, SourceKind
from chat_markdown.etl.fields import PLACEHOLDER_TITLE
from chat_markdown.etl.timestamps import format_iso

SYNTHESIZED_ID_PREFIX = "conversation_"


def role_label(role: Role | str) -> str:
    return "User" if role == Role.USER else "Assistant"


def _yaml_quote(value: str) -> str:
    return '"' + value.replace('"', '\\"') + '"'


def _id_key(source_kind: SourceKind) -> str:
    return f"{source_kind.value.lower()}_conversation_id"


def _time_bullets(conversation: Conversation) -> list[str]:
    lines: list[str] = []
    if conversation.create_time is not None:
        lines.append(f"- Created (UTC): {format_iso(conversation.create_time)}\n")
    if conversation.update_time is not None:
        lines.append(f"- Updated (UTC): {format_iso(conversation.update_time)}\n")
    return lines


def _render_message(message: Message, heading: str) -> str:
    lines = [f"{heading} {role_label(message.role)}\n"]
    if message.timestamp is not None:
        lines.append(f"*Time (UTC): {format_iso(message.timestamp)}*\n")
    lines.append("\n")
    lines.append(f"{message.content}\n\n")
    return "".join(lines)


def conversation_to_markdown(
    conversation: Conversation, source_kind: SourceKind
) -> str:
    """Render one conversation as a standalone document with YAML front matter."""
    title = conversation.title or PLACEHOLDER_TITLE
    parts: list[str] = ["---\n", f"title: {_yaml_quote(title)}\n"]
    parts.append(f"{_id_key(source_kind)}: {_yaml_quote(conversation.id)}\n")
    if conversation.create_time is not None:
        parts.append(f"created_utc: {format_iso(conversation.create_time)}\n")
    if conversation.update_time is not None:
        parts.append(f"updated_utc: {format_iso(conversation.update_time)}\n")
    parts.append("---\n\n")

    parts.append(f"# {title}\n\n")
    bullets = _time_bullets(conversation)
    if bullets:
        parts.extend(bullets)
        parts.append("\n")
    parts.append("---\n\n")

    for message in conversation.messages:
        parts.append(_render_message(message, "##"))
    return "".join(parts)


def conversations_to_markdown(
    conversations: list[Conversation] | tuple[Conversation, ...],
    period: str,
    source_kind: SourceKind,
) -> str:
    """Render a group of conversations as one document titled by *period*.

    Each conversation becomes a numbered ``##`` section with ``###``
    message headings, closed by a horizontal rule.
    """
    parts: list[str] = [
        f"# {source_kind.label} 会話履歴 - {period}\n\n",
        f"**会話数**: {len(conversations)}\n\n",
        "---\n\n",
    ]
    for number, conversation in enumerate(conversations, start=1):
        parts.append(f"## {number}. {conversation.title or PLACEHOLDER_TITLE}\n\n")
        if not conversation.id.startswith(SYNTHESIZED_ID_PREFIX):
            parts.append(f"- {_id_key(source_kind)}: {conversation.id}\n")
        parts.extend(_time_bullets(conversation))
        parts.append("\n")

        for message in conversation.messages:
            parts.append(_render_message(message, "###"))
        parts.append("---\n\n")
    return "".join(parts)
