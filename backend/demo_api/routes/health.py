"""
SDLC Demo API — Health Check Routes
====================================

What:  Liveness, readiness and detailed health endpoints.
Who:   Called by Docker health checks, Kubernetes probes and load balancers.

Probe semantics:
    /health/live:   The process is up and serving HTTP (always 200)
    /health/ready:  The app finished startup and its accounting subsystem is
                    in place (503 "not ready" otherwise)
    /health:        Detailed report with uptime, version and per-check status

These paths are exempt from rate limiting and analytics recording.
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from prometheus_client import REGISTRY

from demo_api import __version__
from demo_api.exceptions import utc_timestamp
from demo_api.schemas.common import HealthChecks, HealthResponse, ProbeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()


def _accounting_ready(request: Request) -> bool:
    return getattr(request.app.state, "accounting", None) is not None


@router.get("", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request) -> HealthResponse:
    """
    Report overall status plus the state of each in-process dependency.

    There is no database; "checks" covers the accounting subsystem and the
    Prometheus registry that /metrics serves.
    """
    accounting = "healthy" if _accounting_ready(request) else "unhealthy"

    metrics = "healthy"
    try:
        REGISTRY.get_sample_value("http_requests_total")
    except Exception as e:
        metrics = "unhealthy"
        logger.warning("Health check: metrics registry unavailable: %s", str(e))

    overall = "healthy" if accounting == "healthy" and metrics == "healthy" else "unhealthy"

    logger.debug("Health check requested from %s", request.client.host if request.client else "unknown")

    return HealthResponse(
        status=overall,
        timestamp=utc_timestamp(),
        uptime_seconds=round(time.time() - _start_time, 2),
        version=__version__,
        environment=request.app.state.settings.environment,
        checks=HealthChecks(accounting=accounting, metrics=metrics),
    )


@router.get("/live", response_model=ProbeResponse, summary="Liveness probe")
async def liveness() -> ProbeResponse:
    return ProbeResponse(status="alive", timestamp=utc_timestamp())


@router.get(
    "/ready",
    response_model=ProbeResponse,
    responses={503: {"description": "Not ready", "model": ProbeResponse}},
    summary="Readiness probe",
)
async def readiness(request: Request):
    if not _accounting_ready(request):
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "timestamp": utc_timestamp()},
        )
    return ProbeResponse(status="ready", timestamp=utc_timestamp())
