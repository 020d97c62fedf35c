"""
SDLC Demo API — Request Recording Middleware
=============================================

What:  Appends one RequestRecord per completed request to the app's
       RequestRecorder.
Why:   The analytics endpoints need the real outcome of every request:
       final status code and total time, including error responses.
How:   Measures from middleware entry with time.perf_counter(). Instead of
       recording when call_next() returns (the body may still be streaming),
       it attaches a Starlette BackgroundTask to the response. Starlette runs
       background tasks only after the last body chunk has been sent, which
       is the "response finalized" moment.

       The recording task runs after any background task already on the
       response, even when that task fails. If the body stream itself raises
       (a downstream background task failed after the status was sent), the
       request is recorded with the status already sent.

Transparency:
    The middleware never changes status, headers or body. It only appends
    to the response's background work, after any task the route already set.

Unhandled exceptions:
    If the downstream app raises, there is no response to attach to. The
    outcome is recorded as a 500 (what ServerErrorMiddleware will send) and
    the exception is re-raised untouched.
"""

import logging
import time
from typing import Awaitable, Callable, FrozenSet, Optional

from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from demo_api.middleware.rate_limit import EXEMPT_PATHS, client_identifier
from demo_api.services.rate_limiter import wall_clock_ms
from demo_api.services.request_recorder import RequestRecorder

logger = logging.getLogger(__name__)


def route_path(request: Request) -> str:
    """Matched route pattern (/api/tasks/{task_id}) or the raw path if none matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _chain_background(
    existing: Optional[BackgroundTask],
    record: Callable[[], Awaitable[None]],
) -> BackgroundTask:
    if existing is None:
        return BackgroundTask(record)

    async def run_then_record() -> None:
        try:
            await existing()
        finally:
            await record()

    return BackgroundTask(run_then_record)


class RequestRecorderMiddleware(BaseHTTPMiddleware):
    """
    Records completed requests for analytics.

    Args:
        recorder:      The app instance's RequestRecorder
        clock:         Wall clock in Unix ms for record timestamps
        exempt_paths:  Paths that are not recorded (probes, metrics, docs)
    """

    def __init__(
        self,
        app: ASGIApp,
        recorder: RequestRecorder,
        clock: Optional[Callable[[], float]] = None,
        exempt_paths: FrozenSet[str] = EXEMPT_PATHS,
    ):
        super().__init__(app)
        self.recorder = recorder
        self.clock = clock or wall_clock_ms
        self.exempt_paths = exempt_paths

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, start)
            raise

        status_code = response.status_code
        body = response.body_iterator
        recorded = False

        def finalize() -> None:
            nonlocal recorded
            if not recorded:
                recorded = True
                self._record(request, status_code, start)

        async def stream_body():
            try:
                async for chunk in body:
                    yield chunk
            except Exception:
                # Downstream failed after the status was sent
                finalize()
                raise

        async def on_response_finalized() -> None:
            finalize()

        response.body_iterator = stream_body()
        response.background = _chain_background(response.background, on_response_finalized)
        return response

    def _record(self, request: Request, status_code: int, start: float) -> None:
        try:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            self.recorder.observe(
                timestamp_ms=self.clock(),
                method=request.method,
                path=route_path(request),
                status_code=status_code,
                response_time_ms=max(0, elapsed_ms),
                client_id=client_identifier(request),
                user_agent=request.headers.get("user-agent"),
            )
        except Exception:
            # Recording must never affect the response
            logger.exception("Failed to record %s %s", request.method, request.url.path)
