"""
SDLC Demo API — Request Statistics Engine
==========================================

What:  Pure aggregation over a snapshot of the request log.
Why:   The analytics endpoints report the same figures for different time
       windows (last hour, last day, all time).
How:   compute_stats() filters by a lower time bound, then groups and counts
       in a single pass. It never touches the log itself, only the records
       it is handed, so calling it twice on the same input gives equal output.

Ordering rules:
    by_method / by_path / by_status_code keep first-encountered key order.
    top_paths sorts by count descending; sorted() is stable, so paths with
    equal counts stay in first-encountered order.
"""

import math
from typing import Dict, Iterable, List, Optional

from demo_api.schemas.analytics import RequestStats, TopPath
from demo_api.services.request_recorder import RequestRecord

LAST_HOUR_MS = 3_600_000
LAST_DAY_MS = 86_400_000
TOP_PATHS_LIMIT = 10


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percentage(part: int, total: int) -> str:
    if total == 0:
        return "0.00"
    return f"{part / total * 100:.2f}"


def compute_stats(
    records: Iterable[RequestRecord],
    window_start_ms: Optional[float] = None,
) -> RequestStats:
    """
    Aggregate statistics for records at or after `window_start_ms`.

    Args:
        records:          Request records, oldest first
        window_start_ms:  Inclusive lower bound (Unix ms); None means all records

    Returns:
        RequestStats (all-zero totals for an empty window)
    """
    if window_start_ms is None:
        selected: List[RequestRecord] = list(records)
    else:
        selected = [r for r in records if r.timestamp_ms >= window_start_ms]

    by_method: Dict[str, int] = {}
    by_path: Dict[str, int] = {}
    by_status_code: Dict[int, int] = {}
    success_count = 0
    total_time = 0

    for r in selected:
        by_method[r.method] = by_method.get(r.method, 0) + 1
        by_path[r.path] = by_path.get(r.path, 0) + 1
        by_status_code[r.status_code] = by_status_code.get(r.status_code, 0) + 1
        if r.status_code < 400:
            success_count += 1
        total_time += r.response_time_ms

    total = len(selected)
    times = [r.response_time_ms for r in selected]

    top_paths = [
        TopPath(path=path, count=count)
        for path, count in sorted(by_path.items(), key=lambda item: -item[1])[:TOP_PATHS_LIMIT]
    ]

    return RequestStats(
        total_requests=total,
        avg_response_time=_round_half_up(total_time / total) if total else 0,
        min_response_time=min(times) if times else 0,
        max_response_time=max(times) if times else 0,
        success_rate=_percentage(success_count, total),
        error_rate=_percentage(total - success_count, total),
        by_method=by_method,
        by_path=by_path,
        by_status_code=by_status_code,
        top_paths=top_paths,
    )
