"""
Config and logging tests.
"""

import logging

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.core.logging import configure_logging
from observability.sink import JsonTraceSink, LoggingTraceSink, create_sink


def test_defaults(monkeypatch):
    for name in ("MAX_CONVERSATION_HISTORY", "LLM_BACKEND", "PORT", "API_PREFIX"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)
    assert settings.max_conversation_history == 20
    assert settings.llm_backend == "gemini"
    assert settings.port == 5000
    assert settings.api_prefix == "/api"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("MAX_CONVERSATION_HISTORY", "8")
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    monkeypatch.setenv("PORT", "6000")
    monkeypatch.setenv("LLM_BACKEND", "ollama")

    settings = Settings(_env_file=None)
    assert settings.max_conversation_history == 8
    assert settings.gemini_api_key == "from-env"
    assert settings.port == 6000
    assert settings.llm_backend == "ollama"


def test_history_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_conversation_history=0)


@pytest.mark.parametrize("kwargs, level", [
    ({}, "INFO"),
    ({"debug": True}, "DEBUG"),
    ({"environment": "production"}, "WARNING"),
    ({"environment": "production", "debug": True}, "DEBUG"),
    ({"log_level": "error", "debug": True}, "ERROR"),
])
def test_effective_log_level(kwargs, level):
    assert Settings(_env_file=None, **kwargs).effective_log_level == level


def test_configure_logging_sets_level():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    try:
        configure_logging(Settings(_env_file=None, debug=True))
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_create_sink():
    assert isinstance(create_sink("log"), LoggingTraceSink)
    assert isinstance(create_sink("JSON"), JsonTraceSink)
    assert create_sink("none") is None
    with pytest.raises(ValueError):
        create_sink("stdout")
