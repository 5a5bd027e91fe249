from chat_markdown.render.export import render
from chat_markdown.render.filenames import conversation_filename, sanitize_filename
from chat_markdown.render.grouping import group_conversations
from chat_markdown.render.markdown import (
    conversation_to_markdown,
    conversations_to_markdown,
)

__all__ = [
    "conversation_filename",
    "conversation_to_markdown",
    "conversations_to_markdown",
    "group_conversations",
    "render",
    "sanitize_filename",
]
