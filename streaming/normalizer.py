"""
Streaming Response Normalizer

Drives a FrameExtractor over a backend byte stream and emits the
uniform OutputEvent sequence.

Flow per chunk:
    await next chunk -> extractor.feed() -> FRAGMENT events
    -> inline done?  finalize + DONE, stop reading

When the transport ends without an inline done, the extractor is
flushed and the stream is treated as a successful completion.

DESIGN RULES:
- Fragments are emitted in extraction order, immediately
- The session is finalized exactly once, right before DONE
- Errors are not handled here; the caller maps them to one ERROR event
- The chunk generator is closed on every exit path, including inline done
"""

import logging
from contextlib import aclosing
from typing import AsyncGenerator, AsyncIterator, Iterator, List

from streaming.events import OutputEvent
from streaming.extractors import ExtractResult, FrameExtractor
from streaming.finalizer import SessionFinalizer

logger = logging.getLogger(__name__)


class StreamNormalizer:
    """
    Per-request stream state: extractor, accumulated reply, finalizer.
    """

    def __init__(
        self,
        extractor: FrameExtractor,
        finalizer: SessionFinalizer,
        session_id: str = "",
    ):
        self._extractor = extractor
        self._finalizer = finalizer
        self._session_id = session_id
        self._parts: List[str] = []

    @property
    def text(self) -> str:
        """Assistant message accumulated so far."""
        return "".join(self._parts)

    @property
    def fragment_count(self) -> int:
        return len(self._parts)

    async def normalize(self, chunks: AsyncGenerator[bytes, None]) -> AsyncIterator[OutputEvent]:
        """
        Consume chunks and yield events, ending with exactly one DONE.

        Args:
            chunks: Raw response body chunks from the backend

        Yields:
            FRAGMENT events, then DONE
        """
        async with aclosing(chunks) as stream:
            async for chunk in stream:
                logger.debug(
                    f"[{self._session_id}] Received chunk (bytes={len(chunk)}): {chunk[:200]!r}"
                )
                result = self._extractor.feed(chunk)
                for event in self._emit(result):
                    yield event

                if result.done:
                    logger.info(
                        f"[{self._session_id}] Backend signaled done, total assistant length={len(self.text)}"
                    )
                    yield self._complete()
                    return

        for event in self._emit(self._extractor.finish()):
            yield event

        logger.info(
            f"[{self._session_id}] Backend stream ended, total assistant length={len(self.text)}"
        )
        yield self._complete()

    def _emit(self, result: ExtractResult) -> Iterator[OutputEvent]:
        for fragment in result.fragments:
            self._parts.append(fragment)
            logger.debug(
                f"[{self._session_id}] Forwarding part to client (len={len(fragment)})"
            )
            yield OutputEvent.fragment(fragment)

    def _complete(self) -> OutputEvent:
        self._finalizer.finalize(self.text)
        return OutputEvent.done()
