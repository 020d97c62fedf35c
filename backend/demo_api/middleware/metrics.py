"""
SDLC Demo API — Prometheus Metrics Middleware
==============================================

What:  Process-wide HTTP metrics for Prometheus scraping (GET /metrics).
How:   Module-level collectors registered on prometheus_client's default
       registry, which also exports process and GC metrics.

Metrics:
    http_request_duration_seconds{method,route,status_code}  histogram
    http_requests_total{method,route,status_code}            counter
    http_active_connections                                  gauge
"""

import time

from prometheus_client import Counter, Gauge, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from demo_api.middleware.analytics import route_path

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    labelnames=("method", "route", "status_code"),
    buckets=(0.1, 0.5, 1, 2, 5),
)
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    labelnames=("method", "route", "status_code"),
)
ACTIVE_CONNECTIONS = Gauge(
    "http_active_connections",
    "Number of active HTTP connections",
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Record request metrics for Prometheus scraping."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        start = time.perf_counter()
        status_code = 500
        ACTIVE_CONNECTIONS.inc()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.perf_counter() - start
            labels = (request.method, route_path(request), str(status_code))
            REQUEST_LATENCY.labels(*labels).observe(duration)
            REQUEST_COUNT.labels(*labels).inc()
            ACTIVE_CONNECTIONS.dec()
