# LLM Backends Package
from typing import Optional

import httpx

from app.core.config import Settings
from llm.base import BackendAdapter, BackendRequest, BackendResponse
from llm.gemini import GeminiBackend
from llm.ollama import OllamaBackend

BACKENDS = ("gemini", "ollama")


def create_backend(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> BackendAdapter:
    """
    Build the deployment's backend from settings.

    Raises:
        ValueError: If settings.llm_backend names an unknown backend
    """
    name = settings.llm_backend.strip().lower()
    if name == "ollama":
        return OllamaBackend(
            base_url=settings.ollama_url,
            model=settings.ollama_model,
            client=client,
        )
    if name == "gemini":
        return GeminiBackend(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            client=client,
        )
    raise ValueError(f"Unknown LLM backend '{settings.llm_backend}', expected one of {BACKENDS}")


__all__ = [
    "BackendAdapter",
    "BackendRequest",
    "BackendResponse",
    "GeminiBackend",
    "OllamaBackend",
    "create_backend",
]
