"""
Relay Configuration
===================
Service configuration read from the environment.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RelayConfig:
    """Configuration for the SMS relay service."""
    host: str = field(default_factory=lambda: os.environ.get("SMS_RELAY_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("SMS_RELAY_PORT", "8080")))
    gateway_token: str = field(default_factory=lambda: os.environ.get("MESSAGEBIRD_ACCESS_KEY", ""))
    gateway_url: str = field(
        default_factory=lambda: os.environ.get("MESSAGEBIRD_BASE_URL", "https://rest.messagebird.com")
    )
    queue_length: int = field(
        default_factory=lambda: int(os.environ.get("SMS_RELAY_QUEUE_LENGTH", "1000"))
    )
    # Seconds between two sends: 1 SMS/s
    send_interval: float = field(
        default_factory=lambda: float(os.environ.get("SMS_RELAY_SEND_INTERVAL", "1.0"))
    )
    # Must stay below the HTTP write timeout so clients get a 429, not a dropped connection
    enqueue_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SMS_RELAY_ENQUEUE_TIMEOUT", "1.5"))
    )
    shutdown_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SMS_RELAY_SHUTDOWN_TIMEOUT", "5.0"))
    )
    log_level: str = field(default_factory=lambda: os.environ.get("SMS_RELAY_LOG_LEVEL", "INFO"))
    json_logs: bool = field(default_factory=lambda: _env_bool("SMS_RELAY_JSON_LOGS", "true"))
    dry_run: bool = field(default_factory=lambda: _env_bool("SMS_RELAY_DRY_RUN"))

    def validate(self, require_token: bool = True) -> None:
        """
        Raise ValueError for settings the service can not run with.

        Args:
            require_token: Also check the gateway token; off when the
                caller supplies its own sender
        """
        if self.queue_length < 1:
            raise ValueError("queue_length must be at least 1")
        if self.send_interval < 0:
            raise ValueError("send_interval must not be negative")
        if self.enqueue_timeout < 0:
            raise ValueError("enqueue_timeout must not be negative")
        if self.shutdown_timeout < 0:
            raise ValueError("shutdown_timeout must not be negative")
        if require_token and not self.dry_run and not self.gateway_token:
            raise ValueError("gateway token is required unless dry_run is enabled")
