"""
SDLC Demo API — Request Logging Middleware
===========================================

What:  One access log line per HTTP request.
Why:   Deployment and monitoring tooling tails these lines; the demo has no
       other access log (uvicorn's is turned down to WARNING).
How:   Times the downstream call and logs method, path, status, duration,
       request ID and client address.

Log levels by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: request body, headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from demo_api.middleware.rate_limit import client_identifier
from demo_api.middleware.request_id import request_id_var

logger = logging.getLogger("demo_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Health probes are skipped: orchestrators hit them every few seconds
    and they would drown out real traffic.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path.startswith("/health"):
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = client_identifier(request)
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
