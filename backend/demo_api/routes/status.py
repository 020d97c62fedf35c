"""
SDLC Demo API — Service Status Routes
======================================

What:  Service banner, API capability listing and a deliberate failure
       endpoint for exercising error monitoring and alerting.
"""

import logging

from fastapi import APIRouter, Depends

from demo_api import __version__
from demo_api.config import Settings
from demo_api.dependencies import get_settings
from demo_api.exceptions import SimulatedError, utc_timestamp
from demo_api.schemas.common import ApiStatusResponse, ErrorResponse, RootResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Status"])

FEATURES = [
    "User management",
    "Task management",
    "API analytics & monitoring",
    "Rate limiting",
    "Health monitoring",
    "Metrics collection",
    "Error handling",
    "Request logging",
    "Search and filtering",
]

ENDPOINTS = {
    "users": "/api/users",
    "tasks": "/api/tasks",
    "analytics": "/api/analytics",
    "health": "/health",
    "metrics": "/metrics",
}


@router.get("/", response_model=RootResponse, summary="Service banner")
async def root(settings: Settings = Depends(get_settings)) -> RootResponse:
    return RootResponse(
        message=settings.app_name,
        version=__version__,
        environment=settings.environment,
        timestamp=utc_timestamp(),
    )


@router.get("/api/status", response_model=ApiStatusResponse, summary="API status information")
async def api_status(settings: Settings = Depends(get_settings)) -> ApiStatusResponse:
    return ApiStatusResponse(
        api=settings.app_name,
        version=__version__,
        status="operational",
        features=FEATURES,
        endpoints=ENDPOINTS,
        timestamp=utc_timestamp(),
    )


@router.get(
    "/api/error",
    responses={500: {"description": "Always fails", "model": ErrorResponse}},
    summary="Simulate a server error",
)
async def simulate_error():
    logger.warning("Error endpoint called - simulating error")
    raise SimulatedError()
