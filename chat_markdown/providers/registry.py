"""Pipe registry -- maps SourceFormat values to parsing pipe classes"""

from __future__ import annotations

from chat_markdown.core.types import SourceFormat
from chat_markdown.etl.pipe import Pipe
from chat_markdown.providers.gemini import (
    GeminiActivityPipe,
    GeminiContentsPipe,
    GeminiTakeoutPipe,
)
from chat_markdown.providers.generic import (
    ConversationArrayPipe,
    SingleConversationPipe,
)

_PIPES: list[type[Pipe]] = [
    GeminiActivityPipe,
    GeminiTakeoutPipe,
    GeminiContentsPipe,
    ConversationArrayPipe,
    SingleConversationPipe,
]

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

PIPE_REGISTRY: dict[SourceFormat, type[Pipe]] = {
    source_format: pipe_cls
    for pipe_cls in _PIPES
    for source_format in pipe_cls.source_formats
}


def get_pipe(source_format: SourceFormat) -> type[Pipe]:
    """Look up the pipe for a source format. Raises ``KeyError`` for unknown formats."""
    return PIPE_REGISTRY[source_format]
