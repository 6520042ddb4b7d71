# Streaming Package
from streaming.events import EventType, OutputEvent
from streaming.extractors import (
    BraceFrameExtractor,
    ExtractResult,
    FrameExtractor,
    NewlineFrameExtractor,
)
from streaming.finalizer import SessionFinalizer
from streaming.normalizer import StreamNormalizer
from streaming.scanner import JsonObjectScanner

__all__ = [
    "EventType",
    "OutputEvent",
    "BraceFrameExtractor",
    "ExtractResult",
    "FrameExtractor",
    "NewlineFrameExtractor",
    "SessionFinalizer",
    "StreamNormalizer",
    "JsonObjectScanner",
]
