"""
SDLC Demo API — Fixed Window Rate Limiter
==========================================

What:  Per-client fixed window request counter with admit/reject decisions.
Why:   Bounds how fast a single client can call the API and tells the client
       its remaining quota through X-RateLimit-* headers.
How:   One ClientWindow per client id. The first request opens a window of
       `window_ms`; later requests in the same window increment its count.
       Once the count passes `max_requests` the client is rejected until the
       window resets.
Who:   Called by RateLimitMiddleware for every non-exempt request.

Algorithm: Fixed Window Counter
    1. Sweep: drop every window whose reset time has passed (any client)
    2. No window for this client → open one with count=1 → admit
    3. Window exists → count += 1
       count > max   → reject, Retry-After = ceil((reset_at - now) / 1000)
       otherwise     → admit, remaining = max - count

    Fixed (not sliding) window: the quota resets entirely at the window
    boundary, so a client can burst up to 2×max across a boundary.

    Time complexity: O(n) sweep per call where n = clients with an open window
    Space complexity: O(n), windows never outlive their reset time by more
    than one request

Multi-process note:
    Each process keeps its own windows. With N uvicorn workers a client can
    get up to N×max requests per window. Coordinating counts across
    processes is out of scope for this demo.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from demo_api.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    """Current Unix time in milliseconds."""
    return time.time() * 1000


@dataclass
class ClientWindow:
    """Open quota window for one client."""

    count: int
    reset_at_ms: float


@dataclass(frozen=True)
class RateLimitDecision:
    """
    Outcome of RateLimiter.admit().

    Attributes:
        allowed:               True to let the request through
        limit:                 Configured max requests per window
        remaining:             Quota left in the current window (0 on reject)
        reset_epoch_seconds:   Unix time (seconds, rounded up) the window resets
        retry_after_seconds:   Seconds until the client may retry (reject only)
    """

    allowed: bool
    limit: int
    remaining: int
    reset_epoch_seconds: int
    retry_after_seconds: Optional[int] = None

    def headers(self) -> Dict[str, str]:
        """Response headers announcing the client's quota."""
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_epoch_seconds),
        }
        if self.retry_after_seconds is not None:
            headers["Retry-After"] = str(self.retry_after_seconds)
        return headers


class RateLimiter:
    """
    In-memory fixed window rate limiter keyed by client identifier.

    Configuration:
        window_ms:     Window duration in milliseconds (> 0)
        max_requests:  Max requests per client per window (> 0)
        message:       Rejection message returned to the client
        clock:         Returns "now" in Unix milliseconds (injectable for tests)

    Thread Safety:
        admit() does its read-check-increment under a lock. On the asyncio
        event loop this never contends, but sync endpoints and background
        tasks run in a thread pool and must not lose increments.
    """

    def __init__(
        self,
        window_ms: int,
        max_requests: int,
        message: str = "Too many requests, please try again later",
        clock: Optional[Callable[[], float]] = None,
    ):
        if window_ms <= 0:
            raise ConfigurationError(
                f"Rate limit window must be positive, got {window_ms}ms",
                context={"window_ms": window_ms},
            )
        if max_requests <= 0:
            raise ConfigurationError(
                f"Rate limit max requests must be positive, got {max_requests}",
                context={"max_requests": max_requests},
            )
        self.window_ms = window_ms
        self.max_requests = max_requests
        self.message = message
        self._clock = clock or wall_clock_ms
        self._windows: Dict[str, ClientWindow] = {}
        self._lock = threading.Lock()

    def admit(self, client_id: str, now_ms: Optional[float] = None) -> RateLimitDecision:
        """
        Count one request for `client_id` and decide whether to let it through.

        Args:
            client_id: Partition key, normally the client IP address
            now_ms:    Override for the current time (defaults to the clock)

        Returns:
            RateLimitDecision; the caller turns it into headers or a 429.
        """
        now = self._clock() if now_ms is None else now_ms

        with self._lock:
            self._sweep(now)

            window = self._windows.get(client_id)
            if window is None:
                window = ClientWindow(count=1, reset_at_ms=now + self.window_ms)
                self._windows[client_id] = window
            else:
                window.count += 1

            reset_epoch = math.ceil(window.reset_at_ms / 1000)

            if window.count > self.max_requests:
                retry_after = math.ceil((window.reset_at_ms - now) / 1000)
                decision = RateLimitDecision(
                    allowed=False,
                    limit=self.max_requests,
                    remaining=0,
                    reset_epoch_seconds=reset_epoch,
                    retry_after_seconds=max(0, retry_after),
                )
            else:
                decision = RateLimitDecision(
                    allowed=True,
                    limit=self.max_requests,
                    remaining=max(0, self.max_requests - window.count),
                    reset_epoch_seconds=reset_epoch,
                )

        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded for client %s: retry after %ds",
                client_id,
                decision.retry_after_seconds,
            )
        return decision

    def active_clients(self, now_ms: Optional[float] = None) -> int:
        """Number of clients with an open (not yet reset) window."""
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            self._sweep(now)
            return len(self._windows)

    def reset(self) -> None:
        """Forget every client window."""
        with self._lock:
            self._windows.clear()

    def _sweep(self, now: float) -> None:
        # Caller holds the lock
        expired = [cid for cid, w in self._windows.items() if w.reset_at_ms <= now]
        for cid in expired:
            del self._windows[cid]
        if expired:
            logger.debug("Evicted %d expired rate limit windows", len(expired))
