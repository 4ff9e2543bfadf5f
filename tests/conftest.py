"""
Shared fixtures for sms_relay tests.
"""

import asyncio
import time
from typing import List, Optional

import pytest

from sms_relay.messaging import Segment
from sms_relay.providers.base import GatewaySender, SendResult, MessageStatus


class RecordingSender(GatewaySender):
    """Gateway sender that records calls instead of sending."""

    name = "recording"

    def __init__(self, fail_on: Optional[set] = None, raise_on: Optional[set] = None):
        super().__init__({})
        self.fail_on = fail_on or set()
        self.raise_on = raise_on or set()
        self.calls: List[dict] = []
        self.timestamps: List[float] = []

    async def send(self, originator, recipients, body, udh=None) -> SendResult:
        number = len(self.calls) + 1
        self.calls.append({
            "originator": originator,
            "recipients": recipients,
            "body": body,
            "udh": udh,
        })
        self.timestamps.append(asyncio.get_running_loop().time())

        if number in self.raise_on:
            raise ConnectionError("gateway unreachable")
        if number in self.fail_on:
            return SendResult(
                success=False,
                status=MessageStatus.REJECTED,
                error_code="42",
                error_message="Expected error",
            )
        return SendResult(success=True, provider_message_id=f"msg-{number}")


async def wait_for_calls(sender: RecordingSender, count: int, timeout: float = 2.0) -> None:
    """Poll until the sender has seen `count` calls."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while len(sender.calls) < count:
        if loop.time() > deadline:
            raise AssertionError(f"expected {count} sends, got {len(sender.calls)}")
        await asyncio.sleep(0.005)


def wait_for_calls_sync(sender: RecordingSender, count: int, timeout: float = 2.0) -> None:
    """Blocking variant for tests driving the app through TestClient."""
    deadline = time.monotonic() + timeout
    while len(sender.calls) < count:
        if time.monotonic() > deadline:
            raise AssertionError(f"expected {count} sends, got {len(sender.calls)}")
        time.sleep(0.005)


def make_segment(body: str = "Hello", recipient: str = "380660000000") -> Segment:
    return Segment(body=body, originator="Relay", recipient=recipient)


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()
