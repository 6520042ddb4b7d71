import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.chat import router as api_router
from app.dependencies import close_backend, get_chat_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(f"Relaying chat to '{settings.llm_backend}' backend")
    # Unknown LLM_BACKEND or TRACE_SINK fails startup here
    get_chat_service()
    yield
    await close_backend()

app = FastAPI(
    title=settings.service_name,
    lifespan=lifespan
)

# CORS middleware - allow the chat frontends to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(api_router, prefix=settings.api_prefix)


def run() -> None:
    """Serve the app with uvicorn on API_HOST:PORT."""
    logger.info(f"Server starting on port {settings.port}")
    uvicorn.run(app, host=settings.api_host, port=settings.port)


if __name__ == "__main__":
    run()
