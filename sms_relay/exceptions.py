"""
Relay Exceptions
================
Exception hierarchy for segmentation and delivery errors.
"""

from typing import Optional, Any


class RelayError(Exception):
    """Base exception for all SMS relay errors."""
    pass


class InvalidHeaderArguments(RelayError):
    """Raised when a concatenation header is built outside its valid range."""

    def __init__(self, total: int, sequence: int, reference: int = 0):
        self.total = total
        self.sequence = sequence
        self.reference = reference
        super().__init__(
            f"header values violation: total={total} sequence={sequence} reference={reference}"
        )


class MessageTooLong(RelayError):
    """Raised when a body does not fit into the maximum number of concatenated parts."""

    def __init__(self, length: int, limit: int, segments: Optional[int] = None):
        self.length = length
        self.limit = limit
        self.segments = segments
        if segments is not None:
            message = f"message needs {segments} segments, at most {limit} supported"
        else:
            message = f"message is longer than {limit}"
        super().__init__(message)


class DeliveryFailure(RelayError):
    """A segment was rejected or failed at the gateway. Logged, never retried."""

    def __init__(self, message: str, segment: Any = None, error_code: Optional[str] = None):
        self.message = message
        self.segment = segment
        self.error_code = error_code
        super().__init__(message)


class QueueError(RelayError):
    """Base exception for delivery queue errors."""
    pass


class QueueFull(QueueError):
    """Raised when no queue slot frees up before the enqueue timeout."""
    pass


class QueueClosed(QueueError):
    """Raised when the delivery queue has been shut down."""
    pass
