"""
JSON Object Scanner

Incremental delimiter for top-level JSON objects in a text stream.

Backends that stream concatenated JSON objects (optionally wrapped in a
JSON array) split them at arbitrary points. The scanner keeps its state
across feeds and returns each top-level object's text as soon as its
closing brace arrives.

DESIGN RULES:
- Finds boundaries only; json.loads validates the grammar
- Braces count only outside string literals
- Inside a string, a backslash escapes the next character
- Text outside any object (brackets, commas, whitespace, stray "}") is skipped
"""

from typing import List


class JsonObjectScanner:
    """
    Brace-depth scanner with string-literal awareness.

    Only the unconsumed tail of an incomplete object is retained
    between feeds, so memory stays bounded by the largest frame.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._pos = 0          # next char to examine
        self._start = -1       # index of the open brace of the current object
        self._depth = 0
        self._in_string = False
        self._escaped = False

    @property
    def pending(self) -> str:
        """Text of the incomplete object held for the next feed."""
        return self._buffer[self._start:] if self._start >= 0 else ""

    def feed(self, text: str) -> List[str]:
        """
        Append text and return every object completed by it.

        Args:
            text: Next piece of the decoded stream

        Returns:
            Complete top-level object strings, in stream order
        """
        self._buffer += text
        objects: List[str] = []
        buf = self._buffer
        i = self._pos

        while i < len(buf):
            char = buf[i]

            if self._start < 0:
                # Between objects: wait for an opening brace
                if char == "{":
                    self._start = i
                    self._depth = 1
                i += 1
                continue

            if self._in_string:
                if self._escaped:
                    self._escaped = False
                elif char == "\\":
                    self._escaped = True
                elif char == '"':
                    self._in_string = False
            elif char == '"':
                self._in_string = True
            elif char == "{":
                self._depth += 1
            elif char == "}":
                self._depth -= 1
                if self._depth == 0:
                    objects.append(buf[self._start:i + 1])
                    self._start = -1
            i += 1

        # Keep only the open object (if any)
        if self._start >= 0:
            self._buffer = buf[self._start:]
            self._start = 0
            self._pos = len(self._buffer)
        else:
            self._buffer = ""
            self._pos = 0

        return objects
