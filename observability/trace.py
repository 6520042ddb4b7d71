"""
Stream Trace Model

Captures the lifecycle of one chat stream for observability.
Pure data container, no business logic.

DESIGN RULES:
- No dependencies on backends or the store
- Immutable after creation
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class StreamOutcome(str, Enum):
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StreamTrace:
    """
    Immutable trace of a single chat request.

    Captures:
    - Identity (request_id, session_id, backend)
    - Timing (started_at, finished_at, latency_ms)
    - Outcome (done / error / cancelled) and reply size
    """

    request_id: str
    session_id: str
    backend: str
    outcome: StreamOutcome
    started_at: datetime
    finished_at: datetime
    fragment_count: int = 0
    response_chars: int = 0
    error: Optional[str] = None

    @property
    def latency_ms(self) -> int:
        """Calculate latency in milliseconds."""
        delta = self.finished_at - self.started_at
        return int(delta.total_seconds() * 1000)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging/export."""
        return {
            "request_id": self.request_id,
            "session_id": self.session_id,
            "backend": self.backend,
            "outcome": self.outcome.value,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "latency_ms": self.latency_ms,
            "fragment_count": self.fragment_count,
            "response_chars": self.response_chars,
            "error": self.error,
        }
