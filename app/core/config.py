from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings.

    Read from the process environment (and a local .env file).
    Variable names match the fields, case-insensitive, no prefix.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "chat-relay"
    environment: str = "development"
    debug: bool = False
    log_level: Optional[str] = None

    # API
    api_host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = "/api"
    cors_origins: List[str] = ["https://chat-my-ai.netlify.app", "http://localhost:5173"]

    # Conversation memory
    max_conversation_history: int = Field(default=20, ge=1)

    # Active backend: "gemini" or "ollama" (static per deployment)
    llm_backend: str = "gemini"

    # Ollama (local)
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "deepseek-r1:8b"

    # Gemini (cloud)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Observability: "log", "json" or "none"
    trace_sink: str = "log"

    @property
    def effective_log_level(self) -> str:
        """Explicit LOG_LEVEL wins, then DEBUG, then environment."""
        if self.log_level:
            return self.log_level.upper()
        if self.debug:
            return "DEBUG"
        if self.environment == "production":
            return "WARNING"
        return "INFO"


settings = Settings()
