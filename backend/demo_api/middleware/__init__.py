# Middleware package init
"""
SDLC Demo API — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Rate Limit] → [Recorder] → [Logging] → [Metrics] → Route

    Why this order:
    1. Request ID FIRST: Correlation ID for logs and the X-Request-ID
       header, on every response including 429s
    2. Rate Limit: A rejected request stops here; it is neither recorded
       nor routed
    3. Recorder: Sees the final status of everything that was admitted,
       including responses produced by exception handlers
    4. Logging / Metrics: Access log line and Prometheus counters

    Probe, scrape and docs paths (EXEMPT_PATHS) skip rate limiting and
    recording.
"""
