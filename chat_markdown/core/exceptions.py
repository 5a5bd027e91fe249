"""Custom exceptions for the conversion pipeline."""


class ChatMarkdownError(Exception):
    """Base class for errors surfaced to callers."""

    pass


class FormatError(ChatMarkdownError, ValueError):
    """Raised when the input is not well-formed JSON or nests too deeply to decode.

    This is the only hard failure of :func:`chat_markdown.normalize`;
    every shape-level problem degrades to fewer conversations instead.
    """

    def __init__(self, file_name: str = "", message: str | None = None):
        self.file_name = file_name
        self.message = (
            f"Could not parse {file_name or 'input'} as JSON: {message}"
            if message
            else f"Could not parse {file_name or 'input'} as JSON"
        )
        super().__init__(self.message)


class UnsupportedExportModeError(ChatMarkdownError, ValueError):
    """Raised when :func:`chat_markdown.render` gets an unknown export mode."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(f"Unsupported export mode: {mode!r}")
