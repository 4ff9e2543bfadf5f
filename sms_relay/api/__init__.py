"""
HTTP API
========
FastAPI boundary: request validation, submission endpoint, health checks.
"""

from .app import create_app, build_sender, SERVICE_NAME
from .routes import create_messages_router, SMS_ENDPOINT
from .health import create_health_router, HealthStatus, ComponentHealth, HealthResponse
from .schemas import SubmissionRequest, SubmissionAccepted
from .errors import RelayErrors, create_user_error, validation_exception_handler

__all__ = [
    "create_app",
    "build_sender",
    "SERVICE_NAME",
    "create_messages_router",
    "SMS_ENDPOINT",
    "create_health_router",
    "HealthStatus",
    "ComponentHealth",
    "HealthResponse",
    "SubmissionRequest",
    "SubmissionAccepted",
    "RelayErrors",
    "create_user_error",
    "validation_exception_handler",
]
