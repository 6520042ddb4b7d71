"""
Relay Errors

Error taxonomy for the chat relay.

DESIGN RULES:
- ChatValidationError is raised before any stream is opened
- Backend and transport failures end the stream with one error event
- FrameDecodeError never leaves the frame extractors
- No retries anywhere: every failure is terminal for its request
"""


class RelayError(Exception):
    """Base class for all relay errors."""


class ChatValidationError(RelayError):
    """Inbound chat request is malformed (missing or empty message)."""


class BackendUnavailableError(RelayError):
    """Backend is not configured or rejected the initial request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FrameDecodeError(RelayError):
    """A single backend frame could not be decoded as JSON."""

    def __init__(self, frame: str, reason: str):
        super().__init__(f"{reason}: {frame[:200]}")
        self.frame = frame
        self.reason = reason


class TransportError(RelayError):
    """Connection to the backend failed while connecting or mid-stream."""
