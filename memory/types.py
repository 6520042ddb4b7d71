"""
Memory Types

Data structures for session memory.

DESIGN RULES:
- Turns are immutable once appended
- Chronological order is preserved through trimming
- Session-scoped only
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class Role(str, Enum):
    """Author of a conversation turn."""
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Turn:
    """
    A single conversation message.
    """
    role: Role
    content: str

    def to_message(self) -> Dict[str, str]:
        """Plain {role, content} mapping."""
        return {"role": self.role.value, "content": self.content}


@dataclass
class SessionContext:
    """
    Session conversation context.

    Holds the most recent turns, oldest first, never more than max_turns.
    """
    session_id: str
    turns: List[Turn] = field(default_factory=list)
    max_turns: int = 20

    def add_turn(self, role: Role, content: str) -> Turn:
        """Add a turn, maintaining max size."""
        turn = Turn(role=role, content=content)
        self.turns.append(turn)
        self.trim()
        return turn

    def trim(self) -> None:
        """Drop oldest turns beyond max_turns."""
        if len(self.turns) > self.max_turns:
            self.turns = self.turns[-self.max_turns:]
