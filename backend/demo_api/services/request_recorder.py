"""
SDLC Demo API — Request Recorder
=================================

What:  Bounded, append-only log of completed request outcomes.
Why:   Feeds the analytics endpoints (request counts, latency, error rates)
       without a database.
How:   A deque with maxlen acts as a ring buffer: appending past capacity
       drops the oldest record. Records are frozen dataclasses and are never
       edited after append.
Who:   Written by RequestRecorderMiddleware; read via snapshot() by the
       accounting facade.

Failure Policy:
    Recording must never fail a request. observe() logs and drops any record
    it cannot build or store.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

from demo_api.exceptions import ConfigurationError, RecordingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestRecord:
    """
    One completed request.

    Attributes:
        timestamp_ms:      Unix time in milliseconds when the response finished
        method:            HTTP method
        path:              Route pattern (e.g. /api/users/{user_id}) or raw path
        status_code:       Final status sent to the client
        response_time_ms:  Entry-to-completion time in whole milliseconds
        client_id:         Client identifier (source address)
        user_agent:        User-Agent header, if any
    """

    timestamp_ms: float
    method: str
    path: str
    status_code: int
    response_time_ms: int
    client_id: str
    user_agent: Optional[str] = None

    def __post_init__(self):
        if not self.method:
            raise RecordingError("Request record is missing a method")
        if not 100 <= self.status_code <= 599:
            raise RecordingError(
                f"Invalid status code {self.status_code}",
                context={"status_code": self.status_code},
            )
        if self.response_time_ms < 0:
            raise RecordingError(
                f"Negative response time {self.response_time_ms}ms",
                context={"response_time_ms": self.response_time_ms},
            )


class RequestRecorder:
    """
    Fixed-capacity FIFO log of RequestRecords.

    Configuration:
        capacity:                   Max records kept (default: 1000)
        slow_request_threshold_ms:  Requests slower than this log a warning
    """

    def __init__(self, capacity: int = 1000, slow_request_threshold_ms: int = 1000):
        if capacity <= 0:
            raise ConfigurationError(
                f"Analytics capacity must be positive, got {capacity}",
                context={"capacity": capacity},
            )
        if slow_request_threshold_ms < 0:
            raise ConfigurationError(
                f"Slow request threshold must not be negative, got {slow_request_threshold_ms}ms",
                context={"slow_request_threshold_ms": slow_request_threshold_ms},
            )
        self.capacity = capacity
        self.slow_request_threshold_ms = slow_request_threshold_ms
        self._records: Deque[RequestRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def record(self, record: RequestRecord) -> None:
        """Append a record, evicting the oldest one when the log is full."""
        with self._lock:
            self._records.append(record)

        if record.response_time_ms > self.slow_request_threshold_ms:
            logger.warning(
                "Slow request detected: %s %s - %dms",
                record.method,
                record.path,
                record.response_time_ms,
            )

    def observe(
        self,
        *,
        timestamp_ms: float,
        method: str,
        path: str,
        status_code: int,
        response_time_ms: int,
        client_id: str,
        user_agent: Optional[str] = None,
    ) -> Optional[RequestRecord]:
        """
        Build and append a record from raw request values.

        Returns the stored record, or None when it was dropped. Never raises.
        """
        try:
            record = RequestRecord(
                timestamp_ms=timestamp_ms,
                method=method,
                path=path,
                status_code=status_code,
                response_time_ms=response_time_ms,
                client_id=client_id,
                user_agent=user_agent,
            )
            self.record(record)
            return record
        except RecordingError as e:
            logger.error("Dropped request record: %s | Context: %s", e.message, e.context)
        except Exception:
            logger.exception("Unexpected error while recording %s %s", method, path)
        return None

    def snapshot(self) -> Tuple[RequestRecord, ...]:
        """Immutable copy of the log, oldest first."""
        with self._lock:
            return tuple(self._records)

    def reset(self) -> None:
        with self._lock:
            self._records.clear()
