"""
Delivery Queue
==============
Bounded FIFO of pending segments drained by a single rate-limited dispatcher.
"""

import asyncio
from collections import deque
from typing import Deque, Iterable, Optional
import structlog

from sms_relay.exceptions import DeliveryFailure, QueueClosed, QueueFull
from sms_relay.messaging import Segment, mask_msisdn, weighted_length
from sms_relay.providers.base import GatewaySender
from .models import DeliveryStats

logger = structlog.get_logger(__name__)


class DeliveryQueue:
    """
    Bounded segment queue with one dispatcher sending at a fixed rate.

    Producers block in `enqueue` while the queue is full. The dispatcher
    forwards at most one segment per `send_interval` to the gateway and
    never runs two sends at once.

    Example:
        queue = DeliveryQueue(capacity=1000, send_interval=1.0)
        queue.start(sender)

        await queue.enqueue_many(segments, timeout=2.0)
        ...
        await queue.close(timeout=5.0)
    """

    def __init__(self, capacity: int, send_interval: float = 1.0):
        """
        Args:
            capacity: Max segments waiting for dispatch
            send_interval: Seconds between two consecutive sends
        """
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        if send_interval < 0:
            raise ValueError(f"send_interval must not be negative, got {send_interval}")

        self.capacity = capacity
        self.send_interval = send_interval
        self.stats = DeliveryStats()
        self._items: Deque[Segment] = deque()
        self._cond = asyncio.Condition()
        self._closed = False
        self._worker: Optional[asyncio.Task] = None

    @property
    def size(self) -> int:
        return len(self._items)

    @property
    def free_slots(self) -> int:
        return self.capacity - len(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def running(self) -> bool:
        """True while the dispatcher task is alive."""
        return self._worker is not None and not self._worker.done()

    async def enqueue(self, segment: Segment, timeout: Optional[float] = None) -> None:
        """
        Append a segment, waiting while the queue is full.

        Raises:
            QueueFull: no slot freed within `timeout` seconds
            QueueClosed: queue was shut down
        """
        await self.enqueue_many([segment], timeout=timeout)

    async def enqueue_many(
        self,
        segments: Iterable[Segment],
        timeout: Optional[float] = None,
    ) -> None:
        """
        Append all segments of one submission, in order, or none of them.

        Waits until there is room for every segment, so parts of one
        message are never split by a full queue.

        Raises:
            QueueFull: not enough room within `timeout` seconds, or more
                segments than the queue can ever hold
            QueueClosed: queue was shut down
        """
        batch = list(segments)
        if not batch:
            return

        if len(batch) > self.capacity:
            self.stats.rejected += 1
            raise QueueFull(
                f"{len(batch)} segments do not fit in a queue of {self.capacity}"
            )

        async with self._cond:
            try:
                await asyncio.wait_for(
                    self._cond.wait_for(
                        lambda: self._closed or self.free_slots >= len(batch)
                    ),
                    timeout,
                )
            except asyncio.TimeoutError:
                self.stats.rejected += 1
                logger.warning(
                    "delivery_queue_full",
                    segments=len(batch),
                    size=self.size,
                    capacity=self.capacity,
                    timeout=timeout,
                )
                raise QueueFull(f"no room for {len(batch)} segments within {timeout}s")

            if self._closed:
                self.stats.rejected += 1
                raise QueueClosed("delivery queue is closed")

            self._items.extend(batch)
            self.stats.enqueued += len(batch)
            self._cond.notify_all()

    async def _dequeue(self) -> Segment:
        """Pop the head segment, waiting while empty. Drains before reporting close."""
        async with self._cond:
            await self._cond.wait_for(lambda: self._items or self._closed)
            if not self._items:
                raise QueueClosed("delivery queue is closed")
            segment = self._items.popleft()
            self._cond.notify_all()
            return segment

    def start(
        self,
        sender: GatewaySender,
        send_interval: Optional[float] = None,
    ) -> asyncio.Task:
        """
        Launch the dispatcher. Must be called from a running event loop.

        Args:
            sender: Gateway client receiving the segments
            send_interval: Override of the interval set at construction
        """
        if self.running:
            raise RuntimeError("dispatcher already running")
        if self._closed:
            raise QueueClosed("delivery queue is closed")

        interval = self.send_interval if send_interval is None else send_interval
        if interval < 0:
            raise ValueError(f"send_interval must not be negative, got {interval}")

        self._worker = asyncio.get_running_loop().create_task(
            self._run(sender, interval)
        )
        logger.info(
            "dispatcher_started",
            gateway=sender.name,
            capacity=self.capacity,
            send_interval=interval,
        )
        return self._worker

    async def _run(self, sender: GatewaySender, interval: float) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + interval

        while True:
            # Always yield, even with a zero interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

            try:
                segment = await self._dequeue()
            except QueueClosed:
                logger.info("dispatcher_stopped", sent=self.stats.sent, failed=self.stats.failed)
                return

            next_tick = loop.time() + interval
            await self._dispatch(sender, segment)

    async def _dispatch(self, sender: GatewaySender, segment: Segment) -> None:
        """Send one segment. Failures are logged and the segment is dropped."""
        log = logger.bind(
            gateway=sender.name,
            recipient=mask_msisdn(segment.recipient),
            sequence=segment.sequence,
            total=segment.total,
        )

        try:
            result = await sender.send(
                segment.originator,
                [segment.recipient],
                segment.body,
                udh=segment.header_hex,
            )
        except Exception as e:
            self._record_failure(log, DeliveryFailure(str(e), segment=segment))
            return

        if not result.success:
            self._record_failure(
                log,
                DeliveryFailure(
                    result.error_message or "gateway rejected segment",
                    segment=segment,
                    error_code=result.error_code,
                ),
            )
            return

        self.stats.sent += 1
        log.info(
            "segment_sent",
            message_id=result.provider_message_id,
            length=weighted_length(segment.body),
        )

    def _record_failure(self, log, failure: DeliveryFailure) -> None:
        self.stats.failed += 1
        log.error(
            "segment_delivery_failed",
            error=failure.message,
            error_code=failure.error_code,
        )

    async def close(self, timeout: Optional[float] = None) -> None:
        """
        Shut the queue down.

        Blocked and future producers get QueueClosed. The dispatcher keeps
        draining queued segments for up to `timeout` seconds (forever if
        None) and is then cancelled; whatever is left is dropped.
        """
        async with self._cond:
            self._closed = True
            self._cond.notify_all()

        worker = self._worker
        if worker is not None and not worker.done():
            done, _ = await asyncio.wait({worker}, timeout=timeout)
            if not done:
                worker.cancel()
                try:
                    await worker
                except asyncio.CancelledError:
                    pass

        if self._items:
            self.stats.abandoned += len(self._items)
            logger.warning("delivery_queue_abandoned", segments=len(self._items))
            self._items.clear()

        logger.info("delivery_queue_closed", **self.stats.as_dict())
