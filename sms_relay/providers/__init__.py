"""
SMS Gateway Senders
===================
Outbound gateway clients used by the delivery queue.
"""

from .base import GatewaySender, SendResult, MessageStatus
from .messagebird import MessageBirdSender
from .dry_run import DryRunSender

__all__ = [
    "GatewaySender",
    "SendResult",
    "MessageStatus",
    "MessageBirdSender",
    "DryRunSender",
]
