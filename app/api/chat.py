"""
Chat API Route

Thin HTTP layer over ChatService.
Validates the body shape, then encodes OutputEvents as Server-Sent Events.
Contains NO streaming or backend logic.
"""

import logging
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from app.core.errors import ChatValidationError
from app.dependencies import get_chat_service
from orchestration.chat_service import ChatService, ChatStream

logger = logging.getLogger(__name__)

router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class ChatRequest(BaseModel):
    """API request for a chat message."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(default="default", alias="sessionId", description="Client session key")
    # Checked by ChatService so a bad message gets the relay's own 400
    message: Any = Field(default=None, description="User's message")


async def _sse(stream: ChatStream) -> AsyncIterator[str]:
    async for event in stream.events():
        yield event.to_sse()


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/chat")
async def chat(request: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """
    Relay a chat message and stream the model's reply.

    Responds 400 with {"error": ...} when the message is missing or blank;
    otherwise a text/event-stream of the reply.
    """
    try:
        stream = service.start_chat(request.session_id, request.message)
    except ChatValidationError as e:
        logger.info(f"[{request.session_id}] Rejected chat request: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})

    logger.debug(f"[{stream.session_id}] SSE headers set, starting stream to client")
    return StreamingResponse(
        _sse(stream),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
