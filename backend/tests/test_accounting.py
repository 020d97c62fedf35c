"""
SDLC Demo API — Request Accounting Facade Tests
================================================

What we test:
    ✅ Construction from Settings (and refusal on bad settings)
    ✅ lastHour / lastDay / all windows from one snapshot
    ✅ rateLimitStatus reports clients and records as separate figures
    ✅ reset_all clears both the log and the windows
    ✅ Independent instances share no state
"""

import pytest

from conftest import BASE_TIME_MS, FakeClock, make_record
from demo_api.config import Settings
from demo_api.exceptions import ConfigurationError
from demo_api.services.accounting import RequestAccounting

HOUR_MS = 3_600_000


def _settings(**overrides):
    return Settings(_env_file=None, **overrides)


class TestFromSettings:

    def test_builds_components_from_settings(self):
        accounting = RequestAccounting.from_settings(
            _settings(rate_limit_window_ms=5000, rate_limit_max_requests=7, analytics_capacity=50)
        )

        assert accounting.rate_limiter.window_ms == 5000
        assert accounting.rate_limiter.max_requests == 7
        assert accounting.recorder.capacity == 50

    def test_invalid_window_refuses_to_initialize(self):
        # model_construct skips pydantic validation, like a hand-built config would
        bad = Settings.model_construct(
            rate_limit_window_ms=0,
            rate_limit_max_requests=10,
            rate_limit_message="x",
            analytics_capacity=10,
            slow_request_threshold_ms=1000,
        )
        with pytest.raises(ConfigurationError):
            RequestAccounting.from_settings(bad)

    def test_invalid_capacity_refuses_to_initialize(self):
        bad = Settings.model_construct(
            rate_limit_window_ms=1000,
            rate_limit_max_requests=10,
            rate_limit_message="x",
            analytics_capacity=0,
            slow_request_threshold_ms=1000,
        )
        with pytest.raises(ConfigurationError):
            RequestAccounting.from_settings(bad)

    def test_settings_validation_rejects_non_positive_limits(self):
        with pytest.raises(ValueError):
            _settings(rate_limit_max_requests=0)


class TestGetAllStats:

    def setup_method(self):
        self.clock = FakeClock()
        self.accounting = RequestAccounting.from_settings(_settings(), clock=self.clock)

    def test_windows_filter_independently(self):
        now = self.clock()
        recorder = self.accounting.recorder
        recorder.record(make_record(path="/ancient", timestamp_ms=now - 2 * 24 * HOUR_MS))
        recorder.record(make_record(path="/yesterday", timestamp_ms=now - 5 * HOUR_MS))
        recorder.record(make_record(path="/recent", timestamp_ms=now - 10_000))

        report = self.accounting.get_all_stats()

        assert report.last_hour.total_requests == 1
        assert report.last_day.total_requests == 2
        assert report.all.total_requests == 3
        assert report.records_count == 3
        assert list(report.last_hour.by_path) == ["/recent"]

    def test_hour_boundary_is_inclusive(self):
        now = self.clock()
        self.accounting.recorder.record(make_record(timestamp_ms=now - HOUR_MS))

        assert self.accounting.get_all_stats().last_hour.total_requests == 1

    def test_rate_limit_status_is_distinct_from_record_count(self):
        for i in range(4):
            self.accounting.recorder.record(make_record(timestamp_ms=BASE_TIME_MS + i))
        self.accounting.rate_limiter.admit("10.0.0.1")
        self.accounting.rate_limiter.admit("10.0.0.2")

        status = self.accounting.get_all_stats().rate_limit_status

        assert status.active_clients == 2
        assert status.total_records == 4

    def test_expired_clients_not_counted(self):
        self.accounting.rate_limiter.admit("10.0.0.1")
        self.clock.advance(60_000)

        assert self.accounting.get_all_stats().rate_limit_status.active_clients == 0

    def test_report_serializes_with_camel_case(self):
        data = self.accounting.get_all_stats().model_dump(by_alias=True, mode="json")

        assert set(data) == {"lastHour", "lastDay", "all", "recordsCount", "rateLimitStatus"}
        assert data["rateLimitStatus"] == {"activeClients": 0, "totalRecords": 0}
        assert data["all"]["successRate"] == "0.00"


class TestResetAll:

    def test_clears_log_and_windows(self):
        accounting = RequestAccounting.from_settings(_settings(), clock=FakeClock())
        accounting.recorder.record(make_record())
        accounting.rate_limiter.admit("10.0.0.1")

        accounting.reset_all()

        report = accounting.get_all_stats()
        assert report.records_count == 0
        assert report.rate_limit_status.active_clients == 0

    def test_instances_are_isolated(self):
        first = RequestAccounting.from_settings(_settings(), clock=FakeClock())
        second = RequestAccounting.from_settings(_settings(), clock=FakeClock())

        first.recorder.record(make_record())
        first.rate_limiter.admit("10.0.0.1")

        report = second.get_all_stats()
        assert report.records_count == 0
        assert report.rate_limit_status.active_clients == 0
