"""
Output Events

The uniform event vocabulary sent to chat clients, and its
Server-Sent Events encoding.

Per request the client sees zero or more FRAGMENT events followed by
exactly one DONE, or by exactly one ERROR. Never both.
"""

import json
from dataclasses import dataclass
from enum import Enum

DONE_SENTINEL = "[DONE]"


class EventType(str, Enum):
    FRAGMENT = "fragment"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class OutputEvent:
    """
    One event of a chat response stream.

    data is the fragment text, the error message, or empty for DONE.
    """
    type: EventType
    data: str = ""

    @classmethod
    def fragment(cls, text: str) -> "OutputEvent":
        return cls(type=EventType.FRAGMENT, data=text)

    @classmethod
    def done(cls) -> "OutputEvent":
        return cls(type=EventType.DONE)

    @classmethod
    def error(cls, message: str) -> "OutputEvent":
        return cls(type=EventType.ERROR, data=message)

    @property
    def is_terminal(self) -> bool:
        return self.type != EventType.FRAGMENT

    def to_sse(self) -> str:
        """
        Encode as an SSE unit.

        Fragments and DONE go out as default "message" events whose data is
        a JSON string; DONE carries the literal "[DONE]". Errors use the
        "error" event type.
        """
        if self.type == EventType.ERROR:
            return f"event: error\ndata: {_encode(self.data)}\n\n"
        if self.type == EventType.DONE:
            return f"data: {_encode(DONE_SENTINEL)}\n\n"
        return f"data: {_encode(self.data)}\n\n"


def _encode(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)
