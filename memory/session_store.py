"""
Session Store

In-memory session-scoped conversation storage.

DESIGN RULES:
- No persistence (lost on restart)
- No expiry: sessions live for the process lifetime
- Sessions are created lazily on first access
- Mutated only by append and trim
"""

from threading import Lock
from typing import Dict, List

from memory.types import Role, SessionContext, Turn


class SessionStore:
    """
    In-memory session store.

    Stores bounded conversation history keyed by session_id.
    Concurrent requests for the same session are not serialized
    against each other; the lock only guards the map itself.
    """

    # Default max turns per session
    DEFAULT_MAX_TURNS = 20

    def __init__(self, max_turns: int = DEFAULT_MAX_TURNS):
        """
        Initialize session store.

        Args:
            max_turns: Maximum turns to keep per session
        """
        if max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        self._sessions: Dict[str, SessionContext] = {}
        self._max_turns = max_turns
        self._lock = Lock()

    @property
    def max_turns(self) -> int:
        return self._max_turns

    def get_or_create(self, session_id: str) -> SessionContext:
        """
        Get or create session context.

        Args:
            session_id: Opaque client-supplied session identifier

        Returns:
            SessionContext for the session
        """
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = SessionContext(
                    session_id=session_id,
                    max_turns=self._max_turns,
                )
            return self._sessions[session_id]

    def append_turn(self, session_id: str, role: Role, content: str) -> Turn:
        """
        Append a turn and trim the session to max_turns.

        Args:
            session_id: Session identifier
            role: Role.USER or Role.ASSISTANT
            content: Turn content

        Returns:
            The appended Turn
        """
        context = self.get_or_create(session_id)
        with self._lock:
            return context.add_turn(role, content)

    def trim(self, session_id: str) -> None:
        """Re-apply the sliding window to a session."""
        context = self.get_or_create(session_id)
        with self._lock:
            context.trim()

    def get_history(self, session_id: str) -> List[Turn]:
        """Snapshot of a session's turns, oldest first. Empty if unknown."""
        with self._lock:
            context = self._sessions.get(session_id)
            return list(context.turns) if context else []
