"""
SDLC Demo API — Analytics Route Tests
======================================

What we test:
    ✅ Full report shape (camelCase, three windows, rateLimitStatus)
    ✅ Summary, methods, status-codes and performance views
    ✅ Analytics reads see the requests made before them
    ✅ DELETE /api/analytics resets state (and is refused in production)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import FakeClock
from demo_api.config import Settings
from demo_api.main import create_app


async def _traffic(client):
    await client.get("/api/users")
    await client.get("/api/users/999")
    await client.post("/api/users", json={"name": "Grace", "email": "grace@example.com"})


class TestAnalyticsReport:

    @pytest.mark.asyncio
    async def test_empty_report(self, test_client):
        response = await test_client.get("/api/analytics")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "API analytics and usage statistics"
        assert set(body["data"]) == {"lastHour", "lastDay", "all", "recordsCount", "rateLimitStatus"}
        assert body["data"]["all"]["totalRequests"] == 0
        assert body["data"]["all"]["successRate"] == "0.00"

    @pytest.mark.asyncio
    async def test_report_reflects_prior_requests(self, test_client):
        await _traffic(test_client)

        data = (await test_client.get("/api/analytics")).json()["data"]

        assert data["all"]["totalRequests"] == 3
        assert data["lastHour"]["totalRequests"] == 3
        assert data["recordsCount"] == 3
        assert data["all"]["byMethod"] == {"GET": 2, "POST": 1}
        assert data["all"]["byStatusCode"] == {"200": 1, "404": 1, "201": 1}
        assert data["all"]["successRate"] == "66.67"
        assert data["all"]["errorRate"] == "33.33"
        assert data["rateLimitStatus"] == {"activeClients": 1, "totalRecords": 3}

    @pytest.mark.asyncio
    async def test_top_paths(self, test_client):
        await test_client.get("/api/tasks")
        await test_client.get("/api/users")
        await test_client.get("/api/users")

        top = (await test_client.get("/api/analytics")).json()["data"]["all"]["topPaths"]

        assert top == [{"path": "/api/users", "count": 2}, {"path": "/api/tasks", "count": 1}]

    @pytest.mark.asyncio
    async def test_old_records_leave_the_hour_window(self, test_client, fake_clock):
        await _traffic(test_client)
        fake_clock.advance(2 * 3_600_000)

        data = (await test_client.get("/api/analytics")).json()["data"]

        assert data["lastHour"]["totalRequests"] == 0
        assert data["lastDay"]["totalRequests"] == 3


class TestAnalyticsViews:

    @pytest.mark.asyncio
    async def test_summary(self, test_client):
        await _traffic(test_client)

        data = (await test_client.get("/api/analytics/summary")).json()["data"]

        assert data["currentMetrics"]["totalRequests"] == 3
        assert data["currentMetrics"]["successRate"] == "66.67"
        assert data["lastHour"]["requests"] == 3
        assert data["rateLimiting"]["activeClients"] == 1
        assert len(data["popularEndpoints"]) <= 5

    @pytest.mark.asyncio
    async def test_methods(self, test_client):
        await _traffic(test_client)

        data = (await test_client.get("/api/analytics/methods")).json()["data"]

        assert data["byMethod"] == {"GET": 2, "POST": 1}
        assert data["lastHour"] == {"GET": 2, "POST": 1}

    @pytest.mark.asyncio
    async def test_status_codes(self, test_client):
        await _traffic(test_client)

        data = (await test_client.get("/api/analytics/status-codes")).json()["data"]

        assert data["all"]["404"] == 1
        assert data["errorRate"] == "33.33"

    @pytest.mark.asyncio
    async def test_performance(self, test_client):
        await _traffic(test_client)

        body = (await test_client.get("/api/analytics/performance")).json()

        assert body["unit"] == "milliseconds"
        for window in ("all", "lastHour", "lastDay"):
            times = body["data"][window]
            assert times["minResponseTime"] <= times["avgResponseTime"] <= times["maxResponseTime"]


class TestAnalyticsReset:

    @pytest.mark.asyncio
    async def test_reset_clears_log_and_windows(self, test_client, accounting):
        await _traffic(test_client)

        response = await test_client.delete("/api/analytics")

        assert response.status_code == 200
        assert response.json()["message"] == "Analytics data reset"
        # The reset request itself is recorded once its response completes
        records = accounting.recorder.snapshot()
        assert [(r.method, r.path, r.status_code) for r in records] == [("DELETE", "/api/analytics", 200)]
        assert accounting.rate_limiter.active_clients() == 0

    @pytest.mark.asyncio
    async def test_reset_refused_in_production(self):
        settings = Settings(_env_file=None, environment="production", log_level="WARNING")
        app = create_app(settings, clock=FakeClock())
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            await client.get("/api/users")
            response = await client.delete("/api/analytics")

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Analytics reset is disabled in production"
        assert len(app.state.accounting.recorder) >= 1
