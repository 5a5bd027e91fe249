from chat_markdown.providers.gemini.activity import GeminiActivityPipe
from chat_markdown.providers.gemini.contents import GeminiContentsPipe
from chat_markdown.providers.gemini.schemas import (
    GeminiActivityEntry,
    GeminiActivityRecord,
    GeminiContentsRecord,
)
from chat_markdown.providers.gemini.takeout import GeminiTakeoutPipe

__all__ = [
    "GeminiActivityEntry",
    "GeminiActivityPipe",
    "GeminiActivityRecord",
    "GeminiContentsPipe",
    "GeminiContentsRecord",
    "GeminiTakeoutPipe",
]
