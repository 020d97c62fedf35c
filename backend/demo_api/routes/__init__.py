# Routes package init
"""
SDLC Demo API — API Routes Package
===================================

Route Inventory:
    - status.py:     GET  /                      (service banner)
                     GET  /api/status            (API capabilities)
                     GET  /api/error             (simulated 500)
    - users.py:      GET/POST /api/users, GET /api/users/{id}
    - tasks.py:      CRUD /api/tasks, GET /api/tasks/stats/summary
    - analytics.py:  GET  /api/analytics[/summary|/methods|/status-codes|/performance]
                     DELETE /api/analytics       (reset, non-production only)
    - health.py:     GET  /health, /health/live, /health/ready
    - metrics.py:    GET  /metrics               (Prometheus exposition)

Design Principle:
    Routes are THIN: read the request, call a service, shape the response.
"""
