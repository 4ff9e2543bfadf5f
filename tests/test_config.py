"""
Tests for Configuration, CLI and Logging
========================================
"""

import json
import logging

import pytest
import structlog


class TestRelayConfig:
    """Tests for environment configuration."""

    def test_defaults(self, monkeypatch):
        """Should default to 1000 queued SMS at 1 SMS/s."""
        from sms_relay.config import RelayConfig

        for name in ["SMS_RELAY_QUEUE_LENGTH", "SMS_RELAY_SEND_INTERVAL", "SMS_RELAY_PORT"]:
            monkeypatch.delenv(name, raising=False)

        config = RelayConfig()

        assert config.queue_length == 1000
        assert config.send_interval == 1.0
        assert config.port == 8080

    def test_reads_environment(self, monkeypatch):
        """Should read values from the environment."""
        from sms_relay.config import RelayConfig

        monkeypatch.setenv("SMS_RELAY_QUEUE_LENGTH", "50")
        monkeypatch.setenv("SMS_RELAY_SEND_INTERVAL", "0.5")
        monkeypatch.setenv("MESSAGEBIRD_ACCESS_KEY", "live-key")
        monkeypatch.setenv("SMS_RELAY_DRY_RUN", "yes")

        config = RelayConfig()

        assert config.queue_length == 50
        assert config.send_interval == 0.5
        assert config.gateway_token == "live-key"
        assert config.dry_run is True

    def test_validate(self):
        """Should reject unusable settings."""
        from sms_relay.config import RelayConfig

        RelayConfig(gateway_token="key").validate()
        RelayConfig(gateway_token="", dry_run=True).validate()

        with pytest.raises(ValueError):
            RelayConfig(gateway_token="", dry_run=False).validate()
        with pytest.raises(ValueError):
            RelayConfig(gateway_token="key", queue_length=0).validate()
        with pytest.raises(ValueError):
            RelayConfig(gateway_token="key", send_interval=-1).validate()

        RelayConfig(gateway_token="", dry_run=False).validate(require_token=False)
        with pytest.raises(ValueError):
            RelayConfig(gateway_token="", queue_length=0).validate(require_token=False)

    def test_create_app_validates_with_injected_sender(self):
        """Should reject bad queue settings even when a sender is supplied."""
        from sms_relay.api import create_app
        from sms_relay.config import RelayConfig
        from tests.conftest import RecordingSender

        with pytest.raises(ValueError, match="queue_length"):
            create_app(RelayConfig(queue_length=0, dry_run=True), sender=RecordingSender())
        with pytest.raises(ValueError, match="shutdown_timeout"):
            create_app(
                RelayConfig(gateway_token="", dry_run=False, shutdown_timeout=-1),
                sender=RecordingSender(),
            )

        app = create_app(RelayConfig(gateway_token="", dry_run=False), sender=RecordingSender())
        assert app.state.sender.name

    def test_build_sender(self):
        """Should pick the dry-run sender only in dry-run mode."""
        from sms_relay.api import build_sender
        from sms_relay.config import RelayConfig
        from sms_relay.providers import DryRunSender, MessageBirdSender

        assert isinstance(build_sender(RelayConfig(dry_run=True)), DryRunSender)

        sender = build_sender(RelayConfig(dry_run=False, gateway_token="key"))
        assert isinstance(sender, MessageBirdSender)
        assert sender.access_key == "key"


class TestCLI:
    """Tests for command line parsing."""

    def test_flags_override_environment(self, monkeypatch):
        """Should apply flags on top of the environment."""
        from sms_relay.cli import build_parser, config_from_args

        monkeypatch.setenv("SMS_RELAY_QUEUE_LENGTH", "50")
        args = build_parser().parse_args([
            "--token", "flag-key",
            "--queue-length", "10",
            "--send-interval", "0.25",
            "--log-level", "debug",
            "--console-logs",
        ])

        config = config_from_args(args)

        assert config.gateway_token == "flag-key"
        assert config.queue_length == 10
        assert config.send_interval == 0.25
        assert config.log_level == "DEBUG"
        assert config.json_logs is False

    def test_missing_token_exits(self, monkeypatch, capsys):
        """Should refuse to start without a token outside dry-run mode."""
        from sms_relay.cli import main

        monkeypatch.delenv("MESSAGEBIRD_ACCESS_KEY", raising=False)
        monkeypatch.delenv("SMS_RELAY_DRY_RUN", raising=False)

        assert main([]) == 2
        assert "gateway token is required" in capsys.readouterr().err


class TestLogging:
    """Tests for structured logging setup."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_output(self, capsys):
        """Should emit JSON lines carrying the service name."""
        from sms_relay.logging import setup_logging, get_logger

        setup_logging("sms-relay-test", level="INFO", json_output=True)
        get_logger("test").info("segment_sent", sequence=2)

        lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
        record = json.loads(lines[-1])

        assert record["event"] == "segment_sent"
        assert record["sequence"] == 2
        assert record["service"] == "sms-relay-test"
        assert record["level"] == "info"

    def test_level_filtering(self, capsys):
        """Should drop records below the configured level."""
        from sms_relay.logging import setup_logging, get_logger

        setup_logging("sms-relay-test", level="WARNING", json_output=True)
        get_logger("test").info("not_shown")

        assert "not_shown" not in capsys.readouterr().out
