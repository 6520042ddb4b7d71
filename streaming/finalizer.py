import logging

from memory.session_store import SessionStore
from memory.types import Role

logger = logging.getLogger(__name__)


class SessionFinalizer:
    """
    Records the assistant reply of one request.

    Appends exactly one assistant turn (store trimming applies) the first
    time finalize() is called; later calls are no-ops. Create one per request.
    """

    def __init__(self, store: SessionStore, session_id: str):
        self._store = store
        self._session_id = session_id
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def finalize(self, content: str) -> bool:
        """
        Append the assistant turn.

        Args:
            content: Full assistant reply, possibly empty

        Returns:
            True if the turn was appended, False if already finalized
        """
        if self._finalized:
            logger.warning(f"[{self._session_id}] Finalize called twice, ignoring")
            return False

        self._finalized = True
        self._store.append_turn(self._session_id, Role.ASSISTANT, content)
        logger.debug(
            f"[{self._session_id}] Assistant turn recorded (len={len(content)})"
        )
        return True
