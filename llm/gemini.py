"""
Gemini Backend

Google Generative Language API, streamGenerateContent.

The response body is a JSON array of GenerateContentResponse objects,
flushed as they are produced, so object boundaries rarely line up with
chunk boundaries. Text lives at candidates[0].content.parts[0].text.
"""

from typing import Any, Dict, Optional, Sequence

import httpx

from app.core.errors import BackendUnavailableError
from llm.base import BackendAdapter, BackendRequest
from memory.types import Role, Turn
from streaming.extractors import BraceFrameExtractor, FrameExtractor

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-pro"

# Gemini calls the assistant "model"
ROLE_MAP = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


class GeminiBackend(BackendAdapter):
    """Gemini streaming content generation, API key as query credential."""

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client)
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")

    def check_config(self) -> None:
        if not self.api_key:
            raise BackendUnavailableError("No Gemini API key in env")

    def convert_turn(self, turn: Turn) -> Dict[str, Any]:
        return {"role": ROLE_MAP[turn.role], "parts": [{"text": turn.content}]}

    def build_request(self, history: Sequence[Turn]) -> BackendRequest:
        return BackendRequest(
            url=f"{self.base_url}/models/{self.model}:streamGenerateContent",
            body={"contents": self._messages(history)},
            params={"key": self.api_key or ""},
        )

    def frame_extractor(self, session_id: str = "") -> FrameExtractor:
        return BraceFrameExtractor(session_id)
