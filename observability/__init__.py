# Observability Package
from observability.trace import StreamOutcome, StreamTrace
from observability.sink import TraceSink, LoggingTraceSink, JsonTraceSink, create_sink

__all__ = [
    "StreamOutcome",
    "StreamTrace",
    "TraceSink",
    "LoggingTraceSink",
    "JsonTraceSink",
    "create_sink",
]
