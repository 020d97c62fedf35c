"""
SDLC Demo API — Application Package Initializer
================================================

What: Marks the `demo_api` directory as a Python package.
Why:  Enables module imports like `from demo_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a small layered service:

    ┌─────────────────────────────────────┐
    │      Middleware (request pipeline)  │  ← rate limit, recording, logging
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← accounting, users, tasks
    ├─────────────────────────────────────┤
    │          Schemas (API contracts)    │  ← Pydantic models
    └─────────────────────────────────────┘

    All state lives in memory and is owned by the application instance
    (see `demo_api.main.create_app`), so two apps never share counters.
"""

__version__ = "1.0.0"
