"""
MessageBird Gateway Sender
==========================
Outbound SMS through the MessageBird REST API.
"""

import httpx
from typing import Optional, Dict, Any, List
import structlog

from sms_relay.providers.base import GatewaySender, SendResult, MessageStatus

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://rest.messagebird.com"

# MessageBird field carrying the concatenation header
UDH_FIELD = "udh"


class MessageBirdSender(GatewaySender):
    """
    MessageBird SMS gateway sender.

    Concatenated parts are sent as separate messages with the UDH
    passed in `typeDetails`, so handsets reassemble them in order.
    """

    name = "messagebird"

    def __init__(
        self,
        config: Dict[str, Any],
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            config: {
                "access_key": "xxx",
                "base_url": "https://rest.messagebird.com",  # optional
                "timeout": 10.0,  # optional
            }
            client: Preconfigured HTTP client (tests, shared pools)
        """
        super().__init__(config)
        self.access_key = config["access_key"]
        self.base_url = config.get("base_url", DEFAULT_BASE_URL).rstrip("/")
        self.timeout = float(config.get("timeout", 10.0))
        self._client = client

    async def initialize(self) -> None:
        """Create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        await super().initialize()

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
        await super().close()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"AccessKey {self.access_key}",
            "Accept": "application/json",
        }

    async def send(
        self,
        originator: str,
        recipients: List[str],
        body: str,
        udh: Optional[str] = None,
    ) -> SendResult:
        """Send SMS via MessageBird."""
        if not self._client:
            raise RuntimeError("Sender not initialized")

        payload: Dict[str, Any] = {
            "originator": originator,
            "recipients": recipients,
            "body": body,
        }
        if udh:
            payload["typeDetails"] = {UDH_FIELD: udh}

        try:
            response = await self._client.post(
                f"{self.base_url}/messages",
                json=payload,
                headers=self._headers(),
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("messagebird_send_failed", error=str(e))
            return SendResult(
                success=False,
                status=MessageStatus.FAILED,
                error_message=str(e),
            )

        if not isinstance(data, dict):
            data = {}

        errors = data.get("errors")
        if response.is_success and not errors:
            return SendResult(
                success=True,
                provider_message_id=data.get("id"),
                status=MessageStatus.SENT,
                raw_response=data,
            )

        error = errors[0] if errors else {}
        for item in errors or []:
            logger.warning(
                "messagebird_error",
                code=item.get("code"),
                description=item.get("description"),
                parameter=item.get("parameter"),
            )
        return SendResult(
            success=False,
            status=MessageStatus.REJECTED if errors else MessageStatus.FAILED,
            error_code=str(error.get("code", response.status_code)),
            error_message=error.get("description", f"HTTP {response.status_code}"),
            raw_response=data,
        )

    async def health_check(self) -> bool:
        """Check MessageBird API availability."""
        if not self._client:
            return False

        try:
            response = await self._client.get(
                f"{self.base_url}/balance",
                headers=self._headers(),
            )
            return response.status_code == 200
        except httpx.HTTPError:
            return False
