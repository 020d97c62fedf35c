"""
SDLC Demo API — Request Accounting Subsystem
=============================================

What:  Owns the rate limiter and the request recorder for one application
       instance and produces the composite analytics report.
Why:   Keeps all accounting state in one explicit object that is handed to
       the middleware and to the analytics routes. Two app instances (e.g.
       two tests) never share counters.
How:   create_app() builds one RequestAccounting from Settings and stores it
       on app.state; routes reach it through a FastAPI dependency.

Reporting windows:
    lastHour: records with timestamp >= now - 1h
    lastDay:  records with timestamp >= now - 24h
    all:      every record still in the log
    All three are computed from the same snapshot so they are consistent
    with each other and with recordsCount.
"""

import logging
from typing import Callable, Optional

from demo_api.config import Settings
from demo_api.schemas.analytics import AnalyticsReport, RateLimitStatus
from demo_api.services.rate_limiter import RateLimiter, wall_clock_ms
from demo_api.services.request_recorder import RequestRecorder
from demo_api.services.stats_engine import LAST_DAY_MS, LAST_HOUR_MS, compute_stats

logger = logging.getLogger(__name__)


class RequestAccounting:
    """Rate limiting plus request analytics for one app instance."""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        recorder: RequestRecorder,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.rate_limiter = rate_limiter
        self.recorder = recorder
        self.clock = clock or wall_clock_ms

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        clock: Optional[Callable[[], float]] = None,
    ) -> "RequestAccounting":
        """
        Build the subsystem from application settings.

        Raises:
            ConfigurationError: non-positive window, quota or capacity
        """
        clock = clock or wall_clock_ms
        return cls(
            rate_limiter=RateLimiter(
                window_ms=settings.rate_limit_window_ms,
                max_requests=settings.rate_limit_max_requests,
                message=settings.rate_limit_message,
                clock=clock,
            ),
            recorder=RequestRecorder(
                capacity=settings.analytics_capacity,
                slow_request_threshold_ms=settings.slow_request_threshold_ms,
            ),
            clock=clock,
        )

    def get_all_stats(self, now_ms: Optional[float] = None) -> AnalyticsReport:
        now = self.clock() if now_ms is None else now_ms
        records = self.recorder.snapshot()

        return AnalyticsReport(
            last_hour=compute_stats(records, now - LAST_HOUR_MS),
            last_day=compute_stats(records, now - LAST_DAY_MS),
            all=compute_stats(records),
            records_count=len(records),
            rate_limit_status=RateLimitStatus(
                active_clients=self.rate_limiter.active_clients(now),
                total_records=len(records),
            ),
        )

    def reset_all(self) -> None:
        """Clear the request log and every rate-limit window."""
        self.recorder.reset()
        self.rate_limiter.reset()
        logger.info("Request accounting reset")
