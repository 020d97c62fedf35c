"""
SDLC Demo API — Analytics Schemas
==================================

What:  Pydantic models for request statistics and the analytics endpoints.
Why:   The statistics engine returns immutable snapshots; these models are
       those snapshots and also the API contract for /api/analytics.
How:   Python attributes are snake_case; JSON uses camelCase aliases
       (totalRequests, avgResponseTime, ...) through an alias generator.
       FastAPI serializes response models by alias.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TopPath(_CamelModel):
    path: str
    count: int


class RequestStats(_CamelModel):
    """
    Aggregate statistics over one time window of the request log.

    Totality:
        An empty window yields zeros, "0.00" rates and empty mappings, never
        nulls, so dashboards can render any window without special cases.
    """

    total_requests: int = Field(description="Requests in the window")
    avg_response_time: int = Field(description="Mean response time, rounded ms")
    min_response_time: int = Field(description="Fastest response, ms (0 if none)")
    max_response_time: int = Field(description="Slowest response, ms (0 if none)")
    success_rate: str = Field(description="Percent of responses with status < 400, 2 decimals")
    error_rate: str = Field(description="Percent of responses with status >= 400, 2 decimals")
    by_method: Dict[str, int] = Field(default_factory=dict)
    by_path: Dict[str, int] = Field(default_factory=dict)
    by_status_code: Dict[int, int] = Field(default_factory=dict)
    top_paths: List[TopPath] = Field(default_factory=list, description="Up to 10 busiest paths")


class RateLimitStatus(_CamelModel):
    # activeClients counts open rate-limit windows; totalRecords is the
    # size of the request log. They are different figures.
    active_clients: int
    total_records: int


class AnalyticsReport(_CamelModel):
    """Composite report returned by RequestAccounting.get_all_stats()."""

    last_hour: RequestStats
    last_day: RequestStats
    all: RequestStats
    records_count: int
    rate_limit_status: RateLimitStatus


# ══════════════════════════════════════════════════════════════════════════
# Endpoint payloads
# ══════════════════════════════════════════════════════════════════════════


class CurrentMetrics(_CamelModel):
    total_requests: int
    avg_response_time: int
    success_rate: str
    error_rate: str


class LastHourSummary(_CamelModel):
    requests: int
    avg_response_time: int
    top_paths: List[TopPath]


class AnalyticsSummary(_CamelModel):
    current_metrics: CurrentMetrics
    last_hour: LastHourSummary
    rate_limiting: RateLimitStatus
    popular_endpoints: List[TopPath]


class MethodBreakdown(_CamelModel):
    by_method: Dict[str, int]
    last_hour: Dict[str, int]


class StatusCodeBreakdown(_CamelModel):
    all: Dict[int, int]
    last_hour: Dict[int, int]
    success_rate: str
    error_rate: str


class ResponseTimes(_CamelModel):
    avg_response_time: int
    min_response_time: int
    max_response_time: int


class PerformanceBreakdown(_CamelModel):
    all: ResponseTimes
    last_hour: ResponseTimes
    last_day: ResponseTimes


class AnalyticsResponse(BaseModel):
    data: AnalyticsReport
    timestamp: str
    message: str = "API analytics and usage statistics"


class AnalyticsSummaryResponse(BaseModel):
    data: AnalyticsSummary
    timestamp: str


class MethodBreakdownResponse(BaseModel):
    data: MethodBreakdown
    timestamp: str


class StatusCodeBreakdownResponse(BaseModel):
    data: StatusCodeBreakdown
    timestamp: str


class PerformanceResponse(BaseModel):
    data: PerformanceBreakdown
    timestamp: str
    unit: str = "milliseconds"


class ResetResponse(BaseModel):
    message: str
    timestamp: str
