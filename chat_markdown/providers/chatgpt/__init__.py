from chat_markdown.providers.chatgpt.schemas import (
    ChatGPTAuthor,
    ChatGPTContent,
    ChatGPTMessage,
    ChatGPTNode,
)

__all__ = [
    "ChatGPTAuthor",
    "ChatGPTContent",
    "ChatGPTMessage",
    "ChatGPTNode",
]
