"""Rebuild a linear message order from a ChatGPT-style node mapping.

A ``mapping`` is a tree of message nodes linked by ``parent`` ids; edits
and regenerations create sibling branches. When the export names the
``current_node`` leaf, the visible thread is the parent chain from that
leaf back to the root. Without it, every node with text is sorted by
creation time instead.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from chat_markdown.core.types import Message, Role
from chat_markdown.etl.messages import join_parts
from chat_markdown.etl.timestamps import to_datetime
from chat_markdown.providers.chatgpt.schemas import ChatGPTContent, ChatGPTNode

logger = logging.getLogger(__name__)

SYNTHETIC_ROOT_ID = "client-created-root"
SYNTHETIC_ID_PREFIX = "client-"


def load_node(node_id: str, raw: Any) -> ChatGPTNode:
    """Validate one mapping entry, degrading to a structural node on bad shapes."""
    if not isinstance(raw, Mapping):
        return ChatGPTNode(id=node_id)
    try:
        return ChatGPTNode.model_validate(raw)
    except ValidationError:
        logger.debug("Malformed mapping node %s treated as structural", node_id)
        parent = raw.get("parent")
        return ChatGPTNode(id=node_id, parent=parent if isinstance(parent, str) else None)


def node_text(node: ChatGPTNode) -> str:
    """Return the trimmed text of a node; only plain-string parts count."""
    if node.message is None:
        return ""
    content = node.message.content
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, ChatGPTContent) and content.parts:
        return join_parts(content.parts, strings_only=True).strip()
    return ""


def first_user_node_id(mapping: Mapping[str, Any]) -> str | None:
    """Pick a stable id for a conversation that exported none.

    Prefers the first user text message; otherwise the first node that
    is not a synthetic ``client-`` root.
    """
    for node_id, raw in mapping.items():
        node = load_node(node_id, raw)
        content = node.message.content if node.message else None
        if (
            node.role == "user"
            and isinstance(content, ChatGPTContent)
            and content.content_type == "text"
        ):
            return node_id
    for node_id in mapping:
        if node_id != SYNTHETIC_ROOT_ID and not node_id.startswith(SYNTHETIC_ID_PREFIX):
            return node_id
    return None


def resolve_mapping(mapping: Any, leaf_id: Any = None) -> list[Message]:
    """Return the chronological messages of *mapping*.

    Uses the leaf chain when *leaf_id* names a node of the mapping,
    timestamp order otherwise.
    """
    if not isinstance(mapping, Mapping):
        return []
    if isinstance(leaf_id, str) and leaf_id and mapping.get(leaf_id) is not None:
        return _walk_leaf_chain(mapping, leaf_id)
    return _sort_by_time(mapping)


def _walk_leaf_chain(mapping: Mapping[str, Any], leaf_id: str) -> list[Message]:
    chain: list[Message] = []
    seen: set[str] = set()
    current: str | None = leaf_id

    while current and current in mapping and current not in seen:
        seen.add(current)
        node = load_node(current, mapping[current])
        role = node.role
        text = node_text(node)
        if role in (Role.USER, Role.ASSISTANT) and text:
            chain.append(
                Message(
                    role=Role(role),
                    content=text,
                    timestamp=to_datetime(node.message.create_time),
                )
            )
        current = node.parent

    if current and current in seen:
        logger.warning("Parent cycle at node %s; chain truncated", current)

    chain.reverse()
    return chain


def _sort_key(raw: Any) -> float:
    if isinstance(raw, int | float) and not isinstance(raw, bool):
        return 0.0 if math.isnan(raw) else float(raw)
    parsed = to_datetime(raw)
    return parsed.timestamp() if parsed else 0.0


def _sort_by_time(mapping: Mapping[str, Any]) -> list[Message]:
    nodes = [load_node(node_id, raw) for node_id, raw in mapping.items()]
    candidates = [
        n for n in nodes if n.message is not None and n.message.content is not None
    ]
    candidates.sort(key=lambda n: _sort_key(n.message.create_time))

    messages: list[Message] = []
    for node in candidates:
        if node.message.author is None:
            continue
        role = node.role or Role.USER
        text = node_text(node)
        if not text or role == "system":
            continue
        messages.append(
            Message(
                role=Role.ASSISTANT if role in ("assistant", "model") else Role.USER,
                content=text,
                timestamp=to_datetime(node.message.create_time),
            )
        )
    return messages
