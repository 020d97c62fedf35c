"""
SDLC Demo API — Rate Limiting Middleware
=========================================

What:  Applies the per-client fixed window quota to every request.
Why:   Protects the API from bursts by a single client and tells clients
       their quota through X-RateLimit-* headers.
How:   Asks RateLimiter.admit() for a decision. Rejected requests get a 429
       straight from here; nothing further down the pipeline runs for them
       (no route handler, no analytics record).
Who:   Applied to every request via Starlette middleware.
When:  Right after RequestIDMiddleware (rejects abuse before any processing).

Headers:
    Admitted:  X-RateLimit-Limit, X-RateLimit-Remaining, X-RateLimit-Reset
    Rejected:  the same (Remaining is 0) plus Retry-After
    Reset is a Unix timestamp in seconds; Retry-After is a delay in seconds.
"""

import logging
from typing import FrozenSet

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from demo_api.exceptions import error_content
from demo_api.middleware.request_id import request_id_var
from demo_api.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# Probes, scrape and docs endpoints are never limited or recorded
EXEMPT_PATHS: FrozenSet[str] = frozenset(
    {
        "/health",
        "/health/live",
        "/health/ready",
        "/metrics",
        "/docs",
        "/redoc",
        "/openapi.json",
    }
)


def client_identifier(request: Request) -> str:
    """
    Key used to partition rate-limit state and analytics.

    Caveat: Behind a proxy this is the proxy's address unless uvicorn runs
    with --proxy-headers.
    """
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed window rate limiter in front of the application.

    Args:
        rate_limiter:  The app instance's RateLimiter (owned by RequestAccounting)
        exempt_paths:  Paths that bypass the limiter entirely

    Response on rate limit:
        HTTP 429 Too Many Requests
        Body: {"error": {"message": <configured message>, "status": 429, "timestamp": ...}}
    """

    def __init__(
        self,
        app: ASGIApp,
        rate_limiter: RateLimiter,
        exempt_paths: FrozenSet[str] = EXEMPT_PATHS,
    ):
        super().__init__(app)
        self.rate_limiter = rate_limiter
        self.exempt_paths = exempt_paths

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        decision = self.rate_limiter.admit(client_identifier(request))

        if not decision.allowed:
            logger.warning(
                "[%s] Rejected %s %s with 429",
                request_id_var.get(""),
                request.method,
                request.url.path,
            )
            return JSONResponse(
                status_code=429,
                content=error_content(self.rate_limiter.message, 429),
                headers=decision.headers(),
            )

        response = await call_next(request)
        for name, value in decision.headers().items():
            response.headers[name] = value
        return response
