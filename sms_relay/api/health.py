"""
Health Check Module
===================
Liveness, readiness and component status of the relay.
"""

import time
from typing import Optional, Dict, Any
from fastapi import APIRouter, Request, Response
from pydantic import BaseModel
from enum import Enum
import structlog

logger = structlog.get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    status: str
    latency_ms: Optional[float] = None
    error: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: HealthStatus
    service: str
    version: str
    components: Dict[str, ComponentHealth]
    timestamp: float


def check_queue(queue) -> ComponentHealth:
    """Report delivery queue fill level and dispatcher state."""
    details = {
        "size": queue.size,
        "capacity": queue.capacity,
        "send_interval": queue.send_interval,
        "dispatcher_running": queue.running,
        **queue.stats.as_dict(),
    }
    if queue.closed:
        return ComponentHealth(status="closed", details=details)
    if not queue.running:
        return ComponentHealth(status="error", error="dispatcher not running", details=details)
    return ComponentHealth(status="running", details=details)


async def check_gateway(sender) -> ComponentHealth:
    """Check gateway reachability and latency."""
    try:
        start = time.time()
        healthy = await sender.health_check()
        latency = (time.time() - start) * 1000
        if healthy:
            return ComponentHealth(status="connected", latency_ms=round(latency, 2))
        return ComponentHealth(status="error", error="gateway unavailable", latency_ms=round(latency, 2))
    except Exception as e:
        logger.error("gateway_health_check_failed", error=str(e))
        return ComponentHealth(status="error", error=str(e))


def create_health_router(
    service_name: str,
    version: str = "1.0.0",
) -> APIRouter:
    """
    Create a health check router.

    Reads the queue and the sender from `app.state`.

    Returns:
        FastAPI router with /health, /health/live, and /health/ready endpoints
    """
    router = APIRouter(tags=["Health"])

    @router.get("/health", response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """Health check with queue and gateway status."""
        components: Dict[str, ComponentHealth] = {}
        overall_status = HealthStatus.HEALTHY

        queue = getattr(request.app.state, "queue", None)
        if queue is None:
            overall_status = HealthStatus.UNHEALTHY
        else:
            queue_health = check_queue(queue)
            components["delivery_queue"] = queue_health
            if queue_health.status != "running":
                overall_status = HealthStatus.UNHEALTHY

        sender = getattr(request.app.state, "sender", None)
        if sender is not None:
            gateway_health = await check_gateway(sender)
            components["gateway"] = gateway_health
            if gateway_health.status == "error" and overall_status == HealthStatus.HEALTHY:
                overall_status = HealthStatus.DEGRADED

        return HealthResponse(
            status=overall_status,
            service=service_name,
            version=version,
            components=components,
            timestamp=time.time(),
        )

    @router.get("/health/live")
    async def liveness_probe():
        """Liveness probe - always returns 200 if service is running."""
        return {"status": "alive"}

    @router.get("/health/ready")
    async def readiness_probe(request: Request):
        """Readiness probe - ready while the queue accepts and dispatches segments."""
        queue = getattr(request.app.state, "queue", None)
        if queue is None or queue.closed or not queue.running:
            return Response(
                content='{"status": "not_ready", "reason": "delivery_queue_unavailable"}',
                status_code=503,
                media_type="application/json",
            )
        return {"status": "ready"}

    return router
