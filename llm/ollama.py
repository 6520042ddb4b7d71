"""
Ollama Backend

Local model server speaking the /api/chat streaming protocol:
newline-delimited JSON, one {"message": {"content": ...}, "done": ...}
object per line.
"""

from typing import Any, Dict, Optional, Sequence

import httpx

from llm.base import BackendAdapter, BackendRequest
from memory.types import Turn
from streaming.extractors import FrameExtractor, NewlineFrameExtractor

DEFAULT_URL = "http://localhost:11434"
DEFAULT_MODEL = "deepseek-r1:8b"


class OllamaBackend(BackendAdapter):
    """Ollama chat endpoint, streaming enabled."""

    name = "ollama"

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        model: str = DEFAULT_MODEL,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client)
        self.base_url = base_url.rstrip("/")
        self.model = model

    def convert_turn(self, turn: Turn) -> Dict[str, Any]:
        # Ollama uses the same role names as the relay
        return turn.to_message()

    def build_request(self, history: Sequence[Turn]) -> BackendRequest:
        return BackendRequest(
            url=f"{self.base_url}/api/chat",
            body={
                "model": self.model,
                "messages": self._messages(history),
                "stream": True,
            },
        )

    def frame_extractor(self, session_id: str = "") -> FrameExtractor:
        return NewlineFrameExtractor(session_id)
