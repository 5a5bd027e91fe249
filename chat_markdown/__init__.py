from chat_markdown.core.exceptions import (
    ChatMarkdownError,
    FormatError,
    UnsupportedExportModeError,
)
from chat_markdown.core.types import (
    Conversation,
    ExportMode,
    Message,
    OutputFile,
    ParseResult,
    Role,
    SourceFormat,
    SourceKind,
)
from chat_markdown.etl.pipeline import normalize, normalize_document
from chat_markdown.render import render

__all__ = [
    "ChatMarkdownError",
    "Conversation",
    "ExportMode",
    "FormatError",
    "Message",
    "OutputFile",
    "ParseResult",
    "Role",
    "SourceFormat",
    "SourceKind",
    "UnsupportedExportModeError",
    "normalize",
    "normalize_document",
    "render",
]
