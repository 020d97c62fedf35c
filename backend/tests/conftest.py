"""
SDLC Demo API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own app instance, so rate-limit windows and the
       request log never leak between tests (no global reset needed).

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_clock: Controllable Unix-millisecond clock
    ├── test_settings: Settings isolated from .env and the environment
    ├── app: create_app(test_settings, clock=fake_clock)
    ├── accounting: the app's RequestAccounting
    └── test_client: HTTPX AsyncClient routed straight into the app
"""

import os

# Reduce noise during tests; set before any demo_api import reads Settings
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from demo_api.config import Settings
from demo_api.main import create_app
from demo_api.services.request_recorder import RequestRecord

# 2023-11-14T22:13:20Z
BASE_TIME_MS = 1_700_000_000_000.0


class FakeClock:
    """Wall clock stand-in returning Unix milliseconds; advance() moves it forward."""

    def __init__(self, start_ms: float = BASE_TIME_MS):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


def make_record(
    path: str = "/api/users",
    status_code: int = 200,
    method: str = "GET",
    response_time_ms: int = 10,
    timestamp_ms: float = BASE_TIME_MS,
    client_id: str = "127.0.0.1",
) -> RequestRecord:
    """Build a RequestRecord with sensible defaults for tests."""
    return RequestRecord(
        timestamp_ms=timestamp_ms,
        method=method,
        path=path,
        status_code=status_code,
        response_time_ms=response_time_ms,
        client_id=client_id,
        user_agent="pytest",
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    """
    Settings independent of any .env file.

    Defaults mirror production: 100 requests per 60s window, 1000 records.
    """
    return Settings(
        _env_file=None,
        environment="test",
        log_level="WARNING",
        rate_limit_window_ms=60_000,
        rate_limit_max_requests=100,
        analytics_capacity=1000,
        slow_request_threshold_ms=1000,
    )


@pytest.fixture
def app(test_settings, fake_clock):
    return create_app(test_settings, clock=fake_clock)


@pytest.fixture
def accounting(app):
    return app.state.accounting


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client talking to the app through ASGITransport (no server).

    raise_app_exceptions=False lets tests observe the 500 response that
    ServerErrorMiddleware sends for unexpected exceptions.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
