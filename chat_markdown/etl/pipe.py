from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from chat_markdown.core.types import Conversation, ParseContext, SourceFormat

logger = logging.getLogger(__name__)

Record = TypeVar("Record", bound=BaseModel)


class Pipe(ABC, Generic[Record]):
    """Base class for all source-format parsing pipes.

    A Pipe encapsulates the **Extract** and **Transform** steps for one
    recognised JSON shape (e.g. a ChatGPT ``conversations.json`` array, a
    Gemini activity log). Subclasses implement :meth:`extract` (walk the
    decoded payload and yield one typed record per source conversation)
    and :meth:`transform` (shape each record into a :class:`Conversation`,
    or ``None`` when the record should not be kept).

    Both steps are best-effort: an unexpected shape yields fewer records,
    never an exception.
    """

    source_formats: ClassVar[tuple[SourceFormat, ...]]
    """Source formats this pipe is registered for."""

    record_schema: ClassVar[type[BaseModel]]
    """The model class bound to ``Record``; :meth:`run` rejects other records."""

    def __init__(self) -> None:
        self.extracted_count: int = 0
        self.transformed_count: int = 0

    @abstractmethod
    def extract(self, payload: Any, ctx: ParseContext) -> Iterator[Record]:
        """Yield one validated record per source conversation in *payload*."""
        ...

    @abstractmethod
    def transform(self, record: Record, ctx: ParseContext) -> Conversation | None:
        """Convert one extracted record into a :class:`Conversation`."""
        ...

    def run(self, payload: Any, ctx: ParseContext) -> Iterator[Conversation]:
        """Run the extract → transform loop.

        After the iterator is fully consumed, :attr:`extracted_count` and
        :attr:`transformed_count` reflect the totals.
        """
        for record in self.extract(payload, ctx):
            if not isinstance(record, self.record_schema):
                raise TypeError(
                    f"Schema mismatch: {type(self).__name__} extracted "
                    f"{type(record).__name__} but declares "
                    f"{self.record_schema.__name__}"
                )
            self.extracted_count += 1
            conversation = self.transform(record, ctx)
            if conversation is not None:
                self.transformed_count += 1
                yield conversation
        logger.debug(
            "%s: %d records extracted, %d conversations kept",
            type(self).__name__,
            self.extracted_count,
            self.transformed_count,
        )
