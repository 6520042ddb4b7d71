"""
FastAPI Dependencies

All object creation happens here, not per request.

RULE: routes call exactly one entry point: ChatService.start_chat()
"""

from functools import lru_cache

from app.core.config import settings
from llm import create_backend
from llm.base import BackendAdapter
from memory.session_store import SessionStore
from observability.sink import create_sink
from orchestration.chat_service import ChatService


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Process-wide session store, bounded by MAX_CONVERSATION_HISTORY."""
    return SessionStore(max_turns=settings.max_conversation_history)


@lru_cache(maxsize=1)
def get_backend() -> BackendAdapter:
    """The deployment's single LLM backend (LLM_BACKEND)."""
    return create_backend(settings)


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    """
    Create and cache the ChatService singleton.

    Components wired here:
    - SessionStore: bounded in-memory history
    - BackendAdapter: Gemini or Ollama, per settings
    - TraceSink: per-stream trace output, per settings
    """
    return ChatService(
        store=get_session_store(),
        backend=get_backend(),
        sink=create_sink(settings.trace_sink),
    )


async def close_backend() -> None:
    """Release the backend HTTP client if one was created."""
    if get_backend.cache_info().currsize:
        await get_backend().aclose()
