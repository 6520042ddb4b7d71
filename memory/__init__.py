# Memory Package
from memory.types import Role, Turn, SessionContext
from memory.session_store import SessionStore

__all__ = ["Role", "Turn", "SessionContext", "SessionStore"]
