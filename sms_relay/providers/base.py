"""
Gateway Sender Base
===================
Base classes for outbound SMS gateway integrations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any, List
from enum import Enum
import structlog

logger = structlog.get_logger(__name__)


class MessageStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    REJECTED = "rejected"
    DRY_RUN = "dry_run"


@dataclass
class SendResult:
    """Result of handing one segment to the gateway."""
    success: bool
    provider_message_id: Optional[str] = None
    status: MessageStatus = MessageStatus.SENT
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = None


class GatewaySender(ABC):
    """
    Abstract base class for outbound gateway clients.

    The delivery queue only ever calls `send`; a sender reports gateway
    errors through `SendResult(success=False)` and may raise for
    unexpected failures. Either way the segment is dropped.
    """

    name: str = "base"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: Gateway-specific config (access keys, base URL, etc.)
        """
        self.config = config or {}
        self._is_initialized = False

    async def initialize(self) -> None:
        """Initialize the sender (e.g., create HTTP clients)."""
        self._is_initialized = True
        logger.info("gateway_sender_initialized", gateway=self.name)

    async def close(self) -> None:
        """Clean up resources (e.g., close HTTP clients)."""
        self._is_initialized = False
        logger.info("gateway_sender_closed", gateway=self.name)

    @abstractmethod
    async def send(
        self,
        originator: str,
        recipients: List[str],
        body: str,
        udh: Optional[str] = None,
    ) -> SendResult:
        """
        Send one SMS segment.

        Args:
            originator: Sender MSISDN or alphanumeric ID
            recipients: Recipient MSISDNs
            body: Segment content
            udh: Concatenation header as hex, omitted for single messages

        Returns:
            SendResult with gateway response
        """
        pass

    async def health_check(self) -> bool:
        """
        Check if the gateway is usable.

        Returns:
            True if the sender is initialized
        """
        return self._is_initialized
