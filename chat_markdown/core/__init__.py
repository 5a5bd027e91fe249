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
    ParseContext,
    ParseResult,
    Role,
    SourceFormat,
    SourceKind,
)

__all__ = [
    "ChatMarkdownError",
    "Conversation",
    "ExportMode",
    "FormatError",
    "Message",
    "OutputFile",
    "ParseContext",
    "ParseResult",
    "Role",
    "SourceFormat",
    "SourceKind",
    "UnsupportedExportModeError",
]
