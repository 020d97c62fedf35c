# Services package init
"""
SDLC Demo API — Services Layer
===============================

What:  Business logic layer sitting between routes (HTTP) and in-memory state.
Why:   Routes handle HTTP, services handle rules.

Service Inventory:
    - RateLimiter: Per-client fixed window quota (admit / reject)
    - RequestRecorder: Bounded FIFO log of completed requests
    - compute_stats: Pure aggregation over a snapshot of that log
    - RequestAccounting: Owns limiter + recorder, builds the analytics report
    - UserService / TaskService: In-memory demo resources

Why services are separate from routes:
    Services can be unit-tested without HTTP, and each app instance gets
    its own service objects (see demo_api.main.create_app).
"""
