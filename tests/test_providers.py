"""
Unit Tests for Gateway Senders
==============================
MessageBird request/response mapping and the dry-run sender.
"""

import json

import httpx
import pytest


def make_sender(handler):
    from sms_relay.providers import MessageBirdSender

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return MessageBirdSender({"access_key": "test-key"}, client=client)


class TestMessageBirdSender:
    """Tests for the MessageBird client."""

    @pytest.mark.asyncio
    async def test_send_single_message(self):
        """Should post originator, recipients and body without typeDetails."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["payload"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "mb-123", "recipients": {"totalCount": 1}})

        sender = make_sender(handler)
        await sender.initialize()
        result = await sender.send("LaconicGuy", ["380730220033"], "Hello")
        await sender.close()

        assert result.success is True
        assert result.provider_message_id == "mb-123"
        assert captured["url"] == "https://rest.messagebird.com/messages"
        assert captured["auth"] == "AccessKey test-key"
        assert captured["payload"] == {
            "originator": "LaconicGuy",
            "recipients": ["380730220033"],
            "body": "Hello",
        }

    @pytest.mark.asyncio
    async def test_send_concatenated_part(self):
        """Should pass the UDH hex in typeDetails."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["payload"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "mb-124"})

        sender = make_sender(handler)
        await sender.initialize()
        await sender.send("Karl", ["380730220022"], "part", udh="050003000301")

        assert captured["payload"]["typeDetails"] == {"udh": "050003000301"}

    @pytest.mark.asyncio
    async def test_api_errors(self):
        """Should map an errors array to an unsuccessful result."""
        from sms_relay.providers import MessageStatus

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                422,
                json={"errors": [{"code": 2, "description": "Request not allowed", "parameter": "access_key"}]},
            )

        sender = make_sender(handler)
        await sender.initialize()
        result = await sender.send("Karl", ["380730220022"], "Hello")

        assert result.success is False
        assert result.status == MessageStatus.REJECTED
        assert result.error_code == "2"
        assert result.error_message == "Request not allowed"

    @pytest.mark.asyncio
    async def test_accepted_with_unexpected_body(self):
        """Should treat a 2xx answer without a JSON object as sent."""
        from sms_relay.providers import MessageStatus

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json=["unexpected"])

        sender = make_sender(handler)
        await sender.initialize()
        result = await sender.send("Karl", ["380730220022"], "Hello")

        assert result.success is True
        assert result.status == MessageStatus.SENT
        assert result.provider_message_id is None

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Should report network failures instead of raising."""
        from sms_relay.providers import MessageStatus

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sender = make_sender(handler)
        await sender.initialize()
        result = await sender.send("Karl", ["380730220022"], "Hello")

        assert result.success is False
        assert result.status == MessageStatus.FAILED
        assert "connection refused" in result.error_message

    @pytest.mark.asyncio
    async def test_requires_initialize(self):
        """Should refuse to send without an HTTP client."""
        from sms_relay.providers import MessageBirdSender

        sender = MessageBirdSender({"access_key": "test-key"})

        with pytest.raises(RuntimeError):
            await sender.send("Karl", ["380730220022"], "Hello")

    @pytest.mark.asyncio
    async def test_health_check(self):
        """Should report healthy when the balance endpoint answers 200."""
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/balance"
            return httpx.Response(200, json={"amount": 10})

        sender = make_sender(handler)
        await sender.initialize()

        assert await sender.health_check() is True

        await sender.close()
        assert await sender.health_check() is False


class TestDryRunSender:
    """Tests for the dry-run sender."""

    @pytest.mark.asyncio
    async def test_reports_success(self):
        """Should succeed without contacting anything."""
        from sms_relay.providers import DryRunSender, MessageStatus

        sender = DryRunSender()
        await sender.initialize()
        result = await sender.send("Karl", ["380730220022"], "Hello", udh="050003000201")

        assert result.success is True
        assert result.status == MessageStatus.DRY_RUN
        assert sender.sent == 1
        assert await sender.health_check() is True
