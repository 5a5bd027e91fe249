from __future__ import annotations

import pytest
from pydantic import BaseModel

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
from chat_markdown.providers.registry import PIPE_REGISTRY, get_pipe


class TestRegistry:
    @pytest.mark.parametrize(
        ("source_format", "expected"),
        [
            (SourceFormat.GEMINI_ACTIVITY, GeminiActivityPipe),
            (SourceFormat.CHATGPT_MAPPING, ConversationArrayPipe),
            (SourceFormat.CONVERSATION_ARRAY, ConversationArrayPipe),
            (SourceFormat.CONVERSATIONS_FIELD, ConversationArrayPipe),
            (SourceFormat.GEMINI_TAKEOUT, GeminiTakeoutPipe),
            (SourceFormat.SINGLE_CONVERSATION, SingleConversationPipe),
            (SourceFormat.GEMINI_CONTENTS, GeminiContentsPipe),
            (SourceFormat.GENERIC, ConversationArrayPipe),
        ],
    )
    def test_lookup(self, source_format, expected):
        assert get_pipe(source_format) is expected

    def test_every_parsable_format_registered(self):
        parsable = set(SourceFormat) - {SourceFormat.EMPTY}
        assert set(PIPE_REGISTRY) == parsable

    def test_empty_has_no_pipe(self):
        with pytest.raises(KeyError):
            get_pipe(SourceFormat.EMPTY)

    @pytest.mark.parametrize("pipe_cls", sorted(set(PIPE_REGISTRY.values()), key=str))
    def test_pipes_declare_record_schema(self, pipe_cls):
        assert issubclass(pipe_cls, Pipe)
        assert issubclass(pipe_cls.record_schema, BaseModel)
