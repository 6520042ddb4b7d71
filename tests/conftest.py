import sys
from pathlib import Path
from typing import AsyncIterator, Callable, Iterable, List

import httpx
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from llm.gemini import GeminiBackend
from llm.ollama import OllamaBackend
from memory.session_store import SessionStore


def mock_client(
    chunks: Iterable[bytes] = (),
    status_code: int = 200,
    body: bytes = b"",
    requests: List[httpx.Request] | None = None,
) -> httpx.AsyncClient:
    """
    AsyncClient whose every response streams the given chunks.

    A non-200 status returns `body` instead. Sent requests are appended
    to `requests` when provided.
    """
    chunk_list = list(chunks)

    async def stream() -> AsyncIterator[bytes]:
        for chunk in chunk_list:
            yield chunk

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if status_code != 200:
            return httpx.Response(status_code, content=body)
        return httpx.Response(200, content=stream())

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def chunk_stream(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(max_turns=6)


@pytest.fixture
def ollama_factory() -> Callable[..., OllamaBackend]:
    def make(**kwargs) -> OllamaBackend:
        return OllamaBackend(client=mock_client(**kwargs))
    return make


@pytest.fixture
def gemini_factory() -> Callable[..., GeminiBackend]:
    def make(api_key: str | None = "test-key", **kwargs) -> GeminiBackend:
        return GeminiBackend(api_key=api_key, client=mock_client(**kwargs))
    return make
