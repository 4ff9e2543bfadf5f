"""
Application Factory
===================
FastAPI app wiring the submission endpoint to the delivery queue.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
import structlog

from sms_relay import __version__
from sms_relay.config import RelayConfig
from sms_relay.delivery import DeliveryQueue, Messenger
from sms_relay.providers import GatewaySender, MessageBirdSender, DryRunSender
from .errors import validation_exception_handler
from .health import create_health_router
from .routes import create_messages_router

logger = structlog.get_logger(__name__)

SERVICE_NAME = "sms-relay"


def build_sender(config: RelayConfig) -> GatewaySender:
    """Pick the gateway sender for the given configuration."""
    if config.dry_run:
        return DryRunSender()
    return MessageBirdSender({
        "access_key": config.gateway_token,
        "base_url": config.gateway_url,
    })


def create_app(
    config: Optional[RelayConfig] = None,
    sender: Optional[GatewaySender] = None,
) -> FastAPI:
    """
    Create the relay application.

    The lifespan creates the delivery queue, starts its dispatcher and,
    on shutdown, drains the queue for at most `shutdown_timeout` seconds.

    Args:
        config: Service configuration (environment by default)
        sender: Gateway sender; built from `config` when omitted
    """
    config = config or RelayConfig()
    config.validate(require_token=sender is None)
    if sender is None:
        sender = build_sender(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        queue = DeliveryQueue(config.queue_length, config.send_interval)
        app.state.queue = queue
        app.state.messenger = Messenger(queue, enqueue_timeout=config.enqueue_timeout)

        await sender.initialize()
        queue.start(sender)
        logger.info("relay_started", gateway=sender.name, queue_length=config.queue_length)
        try:
            yield
        finally:
            logger.info("relay_stopping", pending=queue.size)
            await queue.close(timeout=config.shutdown_timeout)
            await sender.close()

    app = FastAPI(title="SMS Relay", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.sender = sender

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(create_messages_router())
    app.include_router(create_health_router(SERVICE_NAME, version=__version__))

    return app
