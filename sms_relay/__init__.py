"""
SMS Relay
=========
Rate-limited SMS submission service: GSM-7 segmentation, concatenation
headers and a single-dispatcher delivery queue.
"""

__version__ = "0.1.0"

# Errors
from sms_relay.exceptions import (
    RelayError,
    InvalidHeaderArguments,
    MessageTooLong,
    DeliveryFailure,
    QueueError,
    QueueFull,
    QueueClosed,
)

# Messaging
from sms_relay.messaging import (
    Segment,
    ConcatHeader,
    weighted_length,
    chunk_body,
    split_to_segments,
)

# Gateway senders
from sms_relay.providers import (
    GatewaySender,
    SendResult,
    MessageStatus,
    MessageBirdSender,
    DryRunSender,
)

# Delivery
from sms_relay.delivery import (
    DeliveryQueue,
    DeliveryStats,
    Messenger,
)

# Config
from sms_relay.config import RelayConfig

__all__ = [
    "__version__",
    "RelayError",
    "InvalidHeaderArguments",
    "MessageTooLong",
    "DeliveryFailure",
    "QueueError",
    "QueueFull",
    "QueueClosed",
    "Segment",
    "ConcatHeader",
    "weighted_length",
    "chunk_body",
    "split_to_segments",
    "GatewaySender",
    "SendResult",
    "MessageStatus",
    "MessageBirdSender",
    "DryRunSender",
    "DeliveryQueue",
    "DeliveryStats",
    "Messenger",
    "RelayConfig",
]
