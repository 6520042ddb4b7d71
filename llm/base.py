"""
Backend Adapter Interface

Contract shared by every LLM backend the relay can talk to.

An adapter translates the session's turn history into a backend request,
opens it as a streaming HTTP response, and supplies the frame extractor
matching the backend's wire format. Its job ends once the raw response
(status + byte stream) is available.

DESIGN RULES:
- Exactly one adapter is active per deployment
- No retries, no request timeout
- httpx errors never leak: they become TransportError
"""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import httpx

from app.core.errors import TransportError
from memory.types import Turn
from streaming.extractors import FrameExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackendRequest:
    """A fully built outbound request."""
    url: str
    body: Dict[str, Any]
    params: Dict[str, str] = field(default_factory=dict)


class BackendResponse:
    """
    Raw streaming response from a backend.

    Thin view over httpx.Response that maps network failures to
    TransportError.
    """

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason(self) -> str:
        return self._response.reason_phrase

    @property
    def ok(self) -> bool:
        return self._response.is_success

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        """Yield body chunks as they arrive."""
        try:
            async for chunk in self._response.aiter_bytes():
                if chunk:
                    yield chunk
        except httpx.HTTPError as e:
            raise TransportError(f"Backend stream failed: {e}") from e

    async def read_text(self) -> str:
        """Read the whole remaining body as text (used for error bodies)."""
        try:
            await self._response.aread()
        except httpx.HTTPError as e:
            raise TransportError(f"Backend stream failed: {e}") from e
        return self._response.text


class BackendAdapter(ABC):
    """
    Abstract LLM backend.

    Subclasses define the request shape, the role mapping and the framing.
    """

    name: str = "backend"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            client: Shared HTTP client. Created lazily (without timeouts)
                    and owned by the adapter when omitted.
        """
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=None)
        return self._client

    @abstractmethod
    def build_request(self, history: Sequence[Turn]) -> BackendRequest:
        """Build the backend request for a session's turn history."""
        pass

    @abstractmethod
    def frame_extractor(self, session_id: str = "") -> FrameExtractor:
        """Fresh extractor for one response stream."""
        pass

    def check_config(self) -> None:
        """
        Raise BackendUnavailableError when required config is missing.
        """
        pass

    @asynccontextmanager
    async def open_stream(
        self,
        history: Sequence[Turn],
        session_id: str = "",
    ) -> AsyncIterator[BackendResponse]:
        """
        Send the request and yield the streaming response.

        The HTTP response is closed when the block exits, including when
        the consumer stops early.

        Raises:
            BackendUnavailableError: Required config is missing
            TransportError: The backend could not be reached
        """
        self.check_config()
        request = self.build_request(history)

        logger.debug(
            f"[{session_id}] Sending request to {self.name} with {len(history)} messages"
        )
        try:
            async with self.client.stream(
                "POST",
                request.url,
                params=request.params or None,
                json=request.body,
            ) as response:
                logger.debug(
                    f"[{session_id}] {self.name} responded: {response.status_code} {response.reason_phrase}"
                )
                yield BackendResponse(response)
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach {self.name} backend: {e}") from e

    async def aclose(self) -> None:
        """Release the HTTP client if this adapter created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _messages(self, history: Sequence[Turn]) -> List[Dict[str, Any]]:
        return [self.convert_turn(turn) for turn in history]

    @abstractmethod
    def convert_turn(self, turn: Turn) -> Dict[str, Any]:
        """Map one turn to the backend's message shape."""
        pass
