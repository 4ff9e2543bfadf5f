"""
Structured Logging
==================
structlog configuration for the relay service.

Usage:
    from sms_relay.logging import setup_logging, get_logger

    setup_logging(service_name="sms-relay", json_output=True)

    logger = get_logger(__name__)
    logger.info("submission_queued", segments=3)
"""

import logging
import sys
from typing import Any

import structlog


def setup_logging(
    service_name: str,
    level: str = "INFO",
    json_output: bool = True,
) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        service_name: Name bound to every log line
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: JSON lines for production, colored console otherwise
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # uvicorn and httpx log through the standard library
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)

    get_logger(__name__).info("logging_configured", service=service_name, level=level.upper())


def get_logger(name: str) -> Any:
    """Get a structlog logger with the given name."""
    return structlog.get_logger(name)
