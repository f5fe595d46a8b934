"""
PaddyHub Backend: Health Check Route
====================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings each of the three stores with SELECT 1.

Status levels:
    - healthy:   every store reachable (HTTP 200)
    - degraded:  some stores reachable (HTTP 200; the other domains still work)
    - unhealthy: no store reachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response

from paddyhub import __version__
from paddyhub.database import stores
from paddyhub.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether each of the car, qr and stock databases is reachable.",
)
async def health_check(response: Response) -> HealthResponse:
    databases = {}
    for store in stores:
        databases[store.name] = "connected" if await store.ping() else "disconnected"

    connected = sum(1 for state in databases.values() if state == "connected")
    if connected == len(databases):
        overall = "healthy"
    elif connected:
        overall = "degraded"
    else:
        overall = "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        databases=databases,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
