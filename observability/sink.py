"""
Trace Sink Interface

Abstract sink for stream traces.

DESIGN RULES:
- Side-effect only
- Never throw exceptions
- Storage-agnostic interface
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from observability.trace import StreamOutcome, StreamTrace

logger = logging.getLogger(__name__)


class TraceSink(ABC):
    """
    Abstract base for trace output destinations.

    Implementations:
    - LoggingTraceSink (default, human-readable)
    - JsonTraceSink (one JSON line per trace)
    """

    @abstractmethod
    def emit(self, trace: StreamTrace) -> None:
        """
        Emit a trace to the sink.

        Must not throw - failures should be logged and ignored.
        """
        pass


class LoggingTraceSink(TraceSink):
    """
    Default sink: one summary log line per stream.
    """

    def emit(self, trace: StreamTrace) -> None:
        try:
            status = "✓" if trace.outcome == StreamOutcome.DONE else "✗"
            line = (
                f"[TRACE] {status} {trace.request_id[:8]} session={trace.session_id} "
                f"backend={trace.backend} outcome={trace.outcome.value} "
                f"fragments={trace.fragment_count} chars={trace.response_chars} "
                f"latency={trace.latency_ms}ms"
            )
            if trace.error:
                line += f" error={trace.error}"
            logger.info(line)
        except Exception as e:
            logger.warning(f"[TRACE ERROR] Failed to emit trace: {e}")


class JsonTraceSink(TraceSink):
    """
    Sink that logs traces as JSON lines.

    Useful for log aggregation systems.
    """

    def emit(self, trace: StreamTrace) -> None:
        try:
            logger.info(json.dumps(trace.to_dict(), ensure_ascii=False))
        except Exception as e:
            logger.warning(f"[TRACE ERROR] Failed to emit JSON trace: {e}")


def create_sink(kind: str) -> Optional[TraceSink]:
    """Sink for the TRACE_SINK setting: "log", "json" or "none"."""
    kind = kind.strip().lower()
    if kind == "log":
        return LoggingTraceSink()
    if kind == "json":
        return JsonTraceSink()
    if kind == "none":
        return None
    raise ValueError(f"Unknown trace sink '{kind}', expected log, json or none")
