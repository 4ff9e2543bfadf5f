"""
Dry-Run Gateway Sender
======================
Sender that never contacts a gateway. Used for local runs without an access key.
"""

from typing import Optional, List
import structlog

from sms_relay.messaging import weighted_length, mask_msisdn
from sms_relay.providers.base import GatewaySender, SendResult, MessageStatus

logger = structlog.get_logger(__name__)


class DryRunSender(GatewaySender):
    """Logs every segment and reports it as sent."""

    name = "dry_run"

    def __init__(self, config=None):
        super().__init__(config)
        self.sent = 0

    async def send(
        self,
        originator: str,
        recipients: List[str],
        body: str,
        udh: Optional[str] = None,
    ) -> SendResult:
        self.sent += 1
        logger.info(
            "dry_run_send",
            originator=originator,
            recipients=[mask_msisdn(r) for r in recipients],
            length=weighted_length(body),
            udh=udh,
        )
        return SendResult(
            success=True,
            provider_message_id=f"dry-run-{self.sent}",
            status=MessageStatus.DRY_RUN,
        )
