"""
SDLC Demo API — Shared Response Schemas
========================================

What:  Error envelope, health probes and service banner models.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")
    status: int = Field(description="HTTP status code")
    timestamp: str = Field(description="When the error occurred (UTC ISO 8601)")
    stack: Optional[str] = Field(default=None, description="Traceback (development only)")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": {
                "message": "Too many requests, please try again later",
                "status": 429,
                "timestamp": "2024-01-15T12:00:00.000Z"
            }
        }
    """

    error: ErrorDetail


class HealthChecks(BaseModel):
    accounting: str = Field(description="Request accounting subsystem: healthy, unhealthy")
    metrics: str = Field(description="Prometheus registry: healthy, unhealthy")


class HealthResponse(BaseModel):
    """
    Detailed health report returned by GET /health.

    Why no database check: the demo keeps all state in memory, so the
    only dependencies are in-process components.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    timestamp: str
    uptime_seconds: float = Field(description="Seconds since the service started")
    version: str
    environment: str
    checks: HealthChecks


class ProbeResponse(BaseModel):
    """Liveness / readiness probe body."""

    status: str
    timestamp: str


class RootResponse(BaseModel):
    message: str
    version: str
    environment: str
    timestamp: str


class ApiStatusResponse(BaseModel):
    api: str
    version: str
    status: str
    features: List[str]
    endpoints: Dict[str, str]
    timestamp: str
