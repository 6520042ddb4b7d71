"""
Frame Extractors

Turn raw backend chunks into plain-text fragments.

Two framings are supported:
- NewlineFrameExtractor: one JSON object per line (Ollama /api/chat)
- BraceFrameExtractor: concatenated, arbitrarily split JSON objects
  (Gemini streamGenerateContent)

DESIGN RULES:
- feed() takes one chunk, finish() flushes at end of stream
- A frame without a fragment is ignored silently
- A frame that is not valid JSON is logged and skipped, never fatal
- Bytes are decoded incrementally so split UTF-8 sequences survive
"""

import codecs
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from app.core.errors import FrameDecodeError
from streaming.scanner import JsonObjectScanner

logger = logging.getLogger(__name__)

Chunk = Union[bytes, str]

# Field paths of the text fragment in each backend's frames
OLLAMA_FRAGMENT_PATH = ("message", "content")
GEMINI_FRAGMENT_PATH = ("candidates", 0, "content", "parts", 0, "text")

_INVALID = object()


@dataclass
class ExtractResult:
    """Fragments decoded from one chunk, plus the inline completion flag."""
    fragments: List[str] = field(default_factory=list)
    done: bool = False


def decode_frame(frame: str) -> Any:
    """
    Parse one frame as JSON.

    Raises:
        FrameDecodeError: If the frame is not valid JSON
    """
    try:
        return json.loads(frame)
    except ValueError as e:
        raise FrameDecodeError(frame, str(e)) from e


def extract_text(frame: Any, path: Sequence[Union[str, int]]) -> Optional[str]:
    """
    Follow a key/index path into a decoded frame.

    Returns the non-empty string found there, else None.
    """
    value = frame
    for key in path:
        if isinstance(key, int):
            if not isinstance(value, list) or len(value) <= key:
                return None
        elif not isinstance(value, dict) or key not in value:
            return None
        value = value[key]
    if isinstance(value, str) and value:
        return value
    return None


class FrameExtractor(ABC):
    """
    Incremental chunk-to-fragment decoder.

    One instance per request; instances are stateful.
    """

    def __init__(self, session_id: str = ""):
        self.session_id = session_id
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def feed(self, chunk: Chunk) -> ExtractResult:
        """Decode the next chunk. Returns fragments completed by it."""
        text = chunk if isinstance(chunk, str) else self._decoder.decode(chunk)
        return self._feed_text(text)

    def finish(self) -> ExtractResult:
        """Flush buffered input once the transport stream has ended."""
        return self._finish_text(self._decoder.decode(b"", final=True))

    @abstractmethod
    def _feed_text(self, text: str) -> ExtractResult:
        pass

    @abstractmethod
    def _finish_text(self, text: str) -> ExtractResult:
        pass

    def _parse(self, frame: str) -> Any:
        """Decode a frame, logging and returning _INVALID on failure."""
        try:
            parsed = decode_frame(frame)
        except FrameDecodeError as e:
            logger.error(
                f"[{self.session_id}] JSON parse error for frame: {e.frame[:200]} ({e.reason})"
            )
            return _INVALID
        if isinstance(parsed, dict):
            logger.debug(f"[{self.session_id}] Parsed frame keys: {list(parsed.keys())}")
        return parsed


class NewlineFrameExtractor(FrameExtractor):
    """
    Newline-delimited JSON frames.

    Each frame may carry message.content and a boolean "done".
    A line split across chunks is carried over to the next chunk.
    Once "done" is seen, everything after it is ignored.
    """

    def __init__(self, session_id: str = ""):
        super().__init__(session_id)
        self._pending = ""
        self._done = False

    def _feed_text(self, text: str) -> ExtractResult:
        result = ExtractResult()
        if self._done:
            return result

        self._pending += text
        *lines, self._pending = self._pending.split("\n")
        self._process_lines(lines, result)
        return result

    def _finish_text(self, text: str) -> ExtractResult:
        result = ExtractResult()
        if self._done:
            return result

        tail, self._pending = self._pending + text, ""
        self._process_lines([tail], result)
        return result

    def _process_lines(self, lines: List[str], result: ExtractResult) -> None:
        for line in lines:
            line = line.strip()
            if not line:
                continue

            frame = self._parse(line)
            if frame is _INVALID:
                continue

            fragment = extract_text(frame, OLLAMA_FRAGMENT_PATH)
            if fragment:
                result.fragments.append(fragment)

            if isinstance(frame, dict) and frame.get("done"):
                self._done = True
                self._pending = ""
                result.done = True
                return


class BraceFrameExtractor(FrameExtractor):
    """
    Brace-matched JSON frames.

    Frames may be concatenated without separators, wrapped in a JSON
    array, and split anywhere across chunks. The text fragment lives at
    candidates[0].content.parts[0].text. There is no inline completion
    flag: the stream ends when the transport does.
    """

    def __init__(self, session_id: str = ""):
        super().__init__(session_id)
        self._scanner = JsonObjectScanner()

    def _feed_text(self, text: str) -> ExtractResult:
        result = ExtractResult()
        for raw in self._scanner.feed(text):
            frame = self._parse(raw)
            if frame is _INVALID:
                continue
            fragment = extract_text(frame, GEMINI_FRAGMENT_PATH)
            if fragment:
                result.fragments.append(fragment)
        return result

    def _finish_text(self, text: str) -> ExtractResult:
        result = self._feed_text(text)
        leftover = self._scanner.pending
        if leftover.strip():
            logger.warning(
                f"[{self.session_id}] Stream ended inside a frame, dropping {len(leftover)} chars: "
                f"{leftover[:200]}"
            )
        return result
