"""
SDLC Demo API — Analytics Route Handlers
=========================================

What:  Read-only views over the request accounting subsystem.
Why:   Lets operators and demo dashboards see traffic, latency and error
       rates without an external metrics stack.
How:   Every handler asks RequestAccounting for a fresh AnalyticsReport and
       reshapes it. Handlers never see the record log or the rate-limit
       windows, only the derived snapshot.

Windows:
    lastHour / lastDay / all are computed independently from one snapshot
    of the log (see RequestAccounting.get_all_stats).
"""

import logging

from fastapi import APIRouter, Depends

from demo_api.config import Settings
from demo_api.dependencies import get_accounting, get_settings
from demo_api.exceptions import ForbiddenError, utc_timestamp
from demo_api.schemas.analytics import (
    AnalyticsResponse,
    AnalyticsSummary,
    AnalyticsSummaryResponse,
    CurrentMetrics,
    LastHourSummary,
    MethodBreakdown,
    MethodBreakdownResponse,
    PerformanceBreakdown,
    PerformanceResponse,
    RequestStats,
    ResetResponse,
    ResponseTimes,
    StatusCodeBreakdown,
    StatusCodeBreakdownResponse,
)
from demo_api.schemas.common import ErrorResponse
from demo_api.services.accounting import RequestAccounting

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


def _response_times(stats: RequestStats) -> ResponseTimes:
    return ResponseTimes(
        avg_response_time=stats.avg_response_time,
        min_response_time=stats.min_response_time,
        max_response_time=stats.max_response_time,
    )


@router.get("", response_model=AnalyticsResponse, summary="Full API analytics report")
async def get_analytics(
    accounting: RequestAccounting = Depends(get_accounting),
) -> AnalyticsResponse:
    report = accounting.get_all_stats()
    logger.info("Analytics data requested (%d records)", report.records_count)
    return AnalyticsResponse(data=report, timestamp=utc_timestamp())


@router.get("/summary", response_model=AnalyticsSummaryResponse, summary="Condensed analytics")
async def get_summary(
    accounting: RequestAccounting = Depends(get_accounting),
) -> AnalyticsSummaryResponse:
    report = accounting.get_all_stats()
    summary = AnalyticsSummary(
        current_metrics=CurrentMetrics(
            total_requests=report.all.total_requests,
            avg_response_time=report.all.avg_response_time,
            success_rate=report.all.success_rate,
            error_rate=report.all.error_rate,
        ),
        last_hour=LastHourSummary(
            requests=report.last_hour.total_requests,
            avg_response_time=report.last_hour.avg_response_time,
            top_paths=report.last_hour.top_paths[:5],
        ),
        rate_limiting=report.rate_limit_status,
        popular_endpoints=report.all.top_paths[:5],
    )
    logger.info("Analytics summary requested")
    return AnalyticsSummaryResponse(data=summary, timestamp=utc_timestamp())


@router.get("/methods", response_model=MethodBreakdownResponse, summary="Requests by HTTP method")
async def get_methods(
    accounting: RequestAccounting = Depends(get_accounting),
) -> MethodBreakdownResponse:
    report = accounting.get_all_stats()
    return MethodBreakdownResponse(
        data=MethodBreakdown(by_method=report.all.by_method, last_hour=report.last_hour.by_method),
        timestamp=utc_timestamp(),
    )


@router.get("/status-codes", response_model=StatusCodeBreakdownResponse, summary="Requests by status code")
async def get_status_codes(
    accounting: RequestAccounting = Depends(get_accounting),
) -> StatusCodeBreakdownResponse:
    report = accounting.get_all_stats()
    return StatusCodeBreakdownResponse(
        data=StatusCodeBreakdown(
            all=report.all.by_status_code,
            last_hour=report.last_hour.by_status_code,
            success_rate=report.all.success_rate,
            error_rate=report.all.error_rate,
        ),
        timestamp=utc_timestamp(),
    )


@router.get("/performance", response_model=PerformanceResponse, summary="Response time statistics")
async def get_performance(
    accounting: RequestAccounting = Depends(get_accounting),
) -> PerformanceResponse:
    report = accounting.get_all_stats()
    return PerformanceResponse(
        data=PerformanceBreakdown(
            all=_response_times(report.all),
            last_hour=_response_times(report.last_hour),
            last_day=_response_times(report.last_day),
        ),
        timestamp=utc_timestamp(),
    )


@router.delete(
    "",
    response_model=ResetResponse,
    responses={403: {"description": "Disabled in production", "model": ErrorResponse}},
    summary="Reset analytics and rate-limit state",
)
async def reset_analytics(
    accounting: RequestAccounting = Depends(get_accounting),
    settings: Settings = Depends(get_settings),
) -> ResetResponse:
    """
    Clear the request log and all rate-limit windows.

    Operational/test utility. Refused in production so a client cannot wipe
    its own rate-limit window.
    """
    if settings.is_production:
        raise ForbiddenError("Analytics reset is disabled in production")
    accounting.reset_all()
    return ResetResponse(message="Analytics data reset", timestamp=utc_timestamp())
