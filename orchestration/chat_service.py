"""
Chat Service

Per-request orchestration of the relay:

1. Validate the inbound message (synchronously, before any stream)
2. Record the user turn in the session store
3. Open the backend stream and normalize it into OutputEvents
4. Map any failure to a single ERROR event
5. Emit a stream trace

DESIGN RULES:
- No HTTP framework code here; the API layer only encodes events
- Exactly one terminal event (DONE or ERROR) per stream
- No assistant turn on backend/transport failure or cancellation
"""

import logging
import uuid
from datetime import datetime
from typing import Any, AsyncIterator, Optional

from app.core.errors import BackendUnavailableError, ChatValidationError, RelayError
from llm.base import BackendAdapter
from memory.session_store import SessionStore
from memory.types import Role
from observability.sink import TraceSink
from observability.trace import StreamOutcome, StreamTrace
from streaming.events import OutputEvent
from streaming.finalizer import SessionFinalizer
from streaming.normalizer import StreamNormalizer

logger = logging.getLogger(__name__)


class ChatStream:
    """
    One accepted chat request, ready to stream.

    Iterate events() exactly once.
    """

    def __init__(
        self,
        session_id: str,
        store: SessionStore,
        backend: BackendAdapter,
        sink: Optional[TraceSink] = None,
        request_id: Optional[str] = None,
    ):
        self.session_id = session_id
        self.request_id = request_id or str(uuid.uuid4())
        self._store = store
        self._backend = backend
        self._sink = sink

    async def events(self) -> AsyncIterator[OutputEvent]:
        """
        Stream the backend reply as OutputEvents.

        Yields:
            FRAGMENT events followed by one DONE, or one ERROR
        """
        sid = self.session_id
        started_at = datetime.now()
        normalizer: Optional[StreamNormalizer] = None
        outcome = StreamOutcome.CANCELLED
        error: Optional[str] = None
        terminal_sent = False

        try:
            history = self._store.get_history(sid)
            async with self._backend.open_stream(history, session_id=sid) as response:
                if not response.ok:
                    body = await response.read_text()
                    logger.error(
                        f"[{sid}] {self._backend.name} returned non-OK: "
                        f"{response.status_code} {response.reason} - body: {body[:500]}"
                    )
                    raise BackendUnavailableError(
                        f"Model error: {body or response.reason}",
                        status_code=response.status_code,
                    )

                normalizer = StreamNormalizer(
                    extractor=self._backend.frame_extractor(sid),
                    finalizer=SessionFinalizer(self._store, sid),
                    session_id=sid,
                )
                async for event in normalizer.normalize(response.iter_bytes()):
                    terminal_sent = event.is_terminal
                    yield event
            outcome = StreamOutcome.DONE

        except RelayError as e:
            outcome, error = StreamOutcome.ERROR, str(e)
            logger.error(f"[{sid}] Chat error: {e}")
            if not terminal_sent:
                yield OutputEvent.error(error)

        except Exception as e:
            outcome, error = StreamOutcome.ERROR, str(e)
            logger.exception(f"[{sid}] Unexpected chat error")
            if not terminal_sent:
                yield OutputEvent.error(error)

        finally:
            if terminal_sent:
                # DONE already went out; a late cleanup failure does not change it
                outcome = StreamOutcome.DONE
            self._emit_trace(started_at, outcome, normalizer, error)

    def _emit_trace(
        self,
        started_at: datetime,
        outcome: StreamOutcome,
        normalizer: Optional[StreamNormalizer],
        error: Optional[str],
    ) -> None:
        if self._sink is None:
            return
        self._sink.emit(StreamTrace(
            request_id=self.request_id,
            session_id=self.session_id,
            backend=self._backend.name,
            outcome=outcome,
            started_at=started_at,
            finished_at=datetime.now(),
            fragment_count=normalizer.fragment_count if normalizer else 0,
            response_chars=len(normalizer.text) if normalizer else 0,
            error=error,
        ))


class ChatService:
    """
    Entry point for chat requests.

    The store, backend and trace sink are injected; the service holds no
    other state.
    """

    def __init__(
        self,
        store: SessionStore,
        backend: BackendAdapter,
        sink: Optional[TraceSink] = None,
    ):
        self._store = store
        self._backend = backend
        self._sink = sink

    @property
    def backend(self) -> BackendAdapter:
        return self._backend

    def start_chat(self, session_id: str, message: Any) -> ChatStream:
        """
        Validate and accept a chat message.

        Args:
            session_id: Opaque client-supplied session key
            message: The user's message

        Returns:
            ChatStream to iterate for the reply

        Raises:
            ChatValidationError: If message is not a non-blank string.
                                 Nothing is recorded in that case.
        """
        if not isinstance(message, str) or not message.strip():
            raise ChatValidationError("User message is required")

        logger.info(f"[{session_id}] Message: {message[:200]}")
        self._store.append_turn(session_id, Role.USER, message)

        return ChatStream(
            session_id=session_id,
            store=self._store,
            backend=self._backend,
            sink=self._sink,
        )
