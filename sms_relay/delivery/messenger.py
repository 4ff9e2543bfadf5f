"""
Messenger
=========
Submission entry point: split a message and queue all of its segments.
"""

import itertools
from typing import List, Optional
import structlog

from sms_relay.exceptions import QueueError
from sms_relay.messaging import Segment, split_to_segments, mask_msisdn, weighted_length
from .queue import DeliveryQueue

logger = structlog.get_logger(__name__)


class Messenger:
    """
    Accepts text submissions and hands their segments to the delivery queue.

    Every multi-part message gets its own concatenation reference number,
    so handsets do not mix up parts of two messages sent back to back.
    """

    def __init__(self, queue: DeliveryQueue, enqueue_timeout: Optional[float] = None):
        """
        Args:
            queue: Delivery queue owned by the application
            enqueue_timeout: Max seconds a submission may wait for queue room
        """
        self.queue = queue
        self.enqueue_timeout = enqueue_timeout
        self._references = itertools.count()

    def _next_reference(self) -> int:
        return next(self._references) % 256

    async def send_text(
        self,
        originator: str,
        recipient: str,
        body: str,
        timeout: Optional[float] = None,
    ) -> List[Segment]:
        """
        Split `body` and queue every segment, all or nothing.

        The message is delivered some time later at the queue's send rate.

        Raises:
            MessageTooLong: body does not fit into 9 concatenated parts
            QueueFull: no room for the whole message within the timeout
            QueueClosed: the service is shutting down
        """
        segments = split_to_segments(
            originator,
            recipient,
            body,
            reference=self._next_reference(),
        )

        wait = self.enqueue_timeout if timeout is None else timeout
        try:
            await self.queue.enqueue_many(segments, timeout=wait)
        except QueueError as e:
            logger.warning(
                "submission_rejected",
                recipient=mask_msisdn(recipient),
                segments=len(segments),
                reason=type(e).__name__,
            )
            raise

        logger.info(
            "submission_queued",
            recipient=mask_msisdn(recipient),
            length=weighted_length(body),
            segments=len(segments),
            queue_size=self.queue.size,
        )
        return segments
