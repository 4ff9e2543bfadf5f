"""
Command Line Entry Point
========================
Run the relay under uvicorn.

    sms-relay --token $MESSAGEBIRD_ACCESS_KEY --queue-length 1000
    sms-relay --dry-run --console-logs
"""

import argparse
import sys
from typing import List, Optional

import structlog

from sms_relay import __version__
from sms_relay.config import RelayConfig
from sms_relay.logging import setup_logging

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sms-relay",
        description=(
            "Rate-limited SMS relay.\n"
            "Accepts messages over HTTP and sends them to the gateway, 1 SMS per send interval."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--host", help="Listen address (default: $SMS_RELAY_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: $SMS_RELAY_PORT or 8080)")
    parser.add_argument("--token", help="SMS gateway API token (default: $MESSAGEBIRD_ACCESS_KEY)")
    parser.add_argument(
        "--queue-length",
        type=int,
        help="SMS queue size (default: $SMS_RELAY_QUEUE_LENGTH or 1000)",
    )
    parser.add_argument(
        "--send-interval",
        type=float,
        help="Seconds between two outbound SMS (default: $SMS_RELAY_SEND_INTERVAL or 1.0)",
    )
    parser.add_argument(
        "--enqueue-timeout",
        type=float,
        help="Max seconds a request waits for queue room before 429 (default: 1.5)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: $SMS_RELAY_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Log messages instead of sending them",
    )
    parser.add_argument(
        "--console-logs",
        action="store_true",
        help="Human-readable logs instead of JSON",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RelayConfig:
    """Environment config with command line flags applied on top."""
    config = RelayConfig()
    overrides = {
        "host": args.host,
        "port": args.port,
        "gateway_token": args.token,
        "queue_length": args.queue_length,
        "send_interval": args.send_interval,
        "enqueue_timeout": args.enqueue_timeout,
        "log_level": args.log_level,
        "dry_run": args.dry_run,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    if args.console_logs:
        config.json_logs = False
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    try:
        config.validate()
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    setup_logging("sms-relay", level=config.log_level, json_output=config.json_logs)

    import uvicorn
    from sms_relay.api import create_app

    app = create_app(config)
    logger.info("relay_listening", host=config.host, port=config.port)

    # Requests block while the queue is full; keep connections bounded
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        timeout_keep_alive=4,
        timeout_graceful_shutdown=int(config.shutdown_timeout) + 1,
        access_log=False,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
