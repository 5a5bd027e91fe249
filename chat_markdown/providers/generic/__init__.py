from chat_markdown.providers.generic.conversations import ConversationArrayPipe
from chat_markdown.providers.generic.schemas import RawConversationRecord
from chat_markdown.providers.generic.single import SingleConversationPipe

__all__ = [
    "ConversationArrayPipe",
    "RawConversationRecord",
    "SingleConversationPipe",
]
