"""
SDLC Demo API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns its own request accounting subsystem and demo stores.
Who:   Called by uvicorn (demo_api.main:app) and by the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────┐ ┌──────────┐ ┌──────────┐ ┌───────┐ ┌─────┐  │
    │  │ Req ID │→│RateLimit │→│ Recorder │→│Logging│→│Prom.│  │
    │  └────────┘ └──────────┘ └──────────┘ └───────┘ └─────┘  │
    │                                                          │
    │  app.state:                                              │
    │    settings, accounting (RateLimiter + RequestRecorder), │
    │    user_service, task_service                            │
    │                                                          │
    │  Routes: /, /api/status, /api/users, /api/tasks,         │
    │          /api/analytics, /health, /metrics               │
    └──────────────────────────────────────────────────────────┘

Error envelope:
    Every error (ours, FastAPI's validation errors, unknown routes and
    unexpected exceptions) is rendered as
    {"error": {"message", "status", "timestamp"}}.
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from demo_api import __version__
from demo_api.config import Settings, settings as default_settings
from demo_api.exceptions import DemoAPIError, error_content
from demo_api.middleware.analytics import RequestRecorderMiddleware
from demo_api.middleware.logging import RequestLoggingMiddleware
from demo_api.middleware.metrics import PrometheusMiddleware
from demo_api.middleware.rate_limit import RateLimitMiddleware
from demo_api.middleware.request_id import RequestIDMiddleware, request_id_var
from demo_api.routes import analytics, health, metrics, status, tasks, users
from demo_api.services.accounting import RequestAccounting
from demo_api.services.task_service import TaskService
from demo_api.services.user_service import UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container runtimes capture it)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, announce limits and endpoints.
    Shutdown: log the final request count. In-memory state is not persisted.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)

    logger.info("=" * 60)
    logger.info("%s v%s starting up (%s)", app_settings.app_name, __version__, app_settings.environment)
    logger.info(
        "Rate limit: %d requests per %dms window; analytics capacity: %d records",
        app_settings.rate_limit_max_requests,
        app_settings.rate_limit_window_ms,
        app_settings.analytics_capacity,
    )
    logger.info("Health check: http://%s:%d/health", app_settings.backend_host, app_settings.backend_port)
    logger.info("Metrics: http://%s:%d/metrics", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info(
        "Shutting down; %d request records discarded",
        len(app.state.accounting.recorder),
    )
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    """
    Map exceptions to the shared JSON error envelope.

    Handler hierarchy:
        DemoAPIError            → exc.status_code (400/403/404/500)
        RequestValidationError  → 400 (first validation message)
        HTTPException           → its own status (e.g. 404 unknown route)
        Exception (fallback)    → 500

    Security: 500 responses always say "Internal Server Error". The stack
    trace is logged server-side and only included in the body when running
    in development.
    """

    def _stack(exc: Exception) -> Optional[str]:
        if not app_settings.is_development:
            return None
        return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    @app.exception_handler(DemoAPIError)
    async def handle_app_error(request: Request, exc: DemoAPIError):
        rid = request_id_var.get("")
        status_code = exc.status_code
        if status_code >= 500:
            logger.error(
                "[%s] Error %d: %s | %s %s | Context: %s",
                rid, status_code, exc.message, request.method, request.url.path, exc.context,
            )
            content = error_content("Internal Server Error", status_code, stack=_stack(exc))
        else:
            logger.warning("[%s] Error %d: %s", rid, status_code, exc.message)
            content = error_content(exc.message, status_code)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Validation failed") if errors else "Validation failed"
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=400, content=error_content(message, 400))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_content(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_content("Internal Server Error", 500, stack=_stack(exc)),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    clock: Optional[Callable[[], float]] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded ones)
        clock:        Wall clock in Unix ms for the accounting subsystem
                      (tests inject a fake one)

    Raises:
        ConfigurationError: invalid rate-limit or analytics settings; the app
        refuses to start rather than run with undefined limits.
    """
    app_settings = app_settings or default_settings

    # Built before the app so a bad configuration fails here
    accounting = RequestAccounting.from_settings(app_settings, clock=clock)

    app = FastAPI(
        title=app_settings.app_name,
        description=(
            "Demonstration backend with users and tasks, health probes, "
            "per-client rate limiting and request analytics."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.accounting = accounting
    app.state.user_service = UserService()
    app.state.task_service = TaskService()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the last one added
    # sees the request first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "Retry-After",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
        ],
    )
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        RequestRecorderMiddleware,
        recorder=accounting.recorder,
        clock=accounting.clock,
    )
    app.add_middleware(RateLimitMiddleware, rate_limiter=accounting.rate_limiter)
    # Request ID outermost so 429 rejections also carry X-Request-ID
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app, app_settings)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(status.router)
    app.include_router(users.router)
    app.include_router(tasks.router)
    app.include_router(analytics.router)
    app.include_router(health.router)
    app.include_router(metrics.router)

    return app


# uvicorn expects `demo_api.main:app` to be importable
app = create_app()
