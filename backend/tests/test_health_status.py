"""
SDLC Demo API — Health, Status, Metrics and Error Envelope Tests
=================================================================
"""

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import FakeClock
from demo_api.config import Settings
from demo_api.main import create_app


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_check(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "test"
        assert body["checks"] == {"accounting": "healthy", "metrics": "healthy"}
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_liveness(self, test_client):
        response = await test_client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    @pytest.mark.asyncio
    async def test_readiness(self, test_client):
        response = await test_client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    @pytest.mark.asyncio
    async def test_not_ready_without_accounting(self, app, test_client):
        app.state.accounting = None

        response = await test_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not ready"


class TestStatus:

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client, test_settings):
        body = (await test_client.get("/")).json()

        assert body["message"] == test_settings.app_name
        assert body["environment"] == "test"

    @pytest.mark.asyncio
    async def test_api_status(self, test_client):
        body = (await test_client.get("/api/status")).json()

        assert body["status"] == "operational"
        assert body["endpoints"]["analytics"] == "/api/analytics"
        assert "Rate limiting" in body["features"]


class TestMetrics:

    @pytest.mark.asyncio
    async def test_prometheus_exposition(self, test_client):
        await test_client.get("/api/users")

        response = await test_client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "http_requests_total" in response.text
        assert "http_request_duration_seconds_bucket" in response.text


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_simulated_error_hides_details(self, test_client):
        response = await test_client.get("/api/error")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["message"] == "Internal Server Error"
        assert error["status"] == 500
        assert error["timestamp"].endswith("Z")
        assert "stack" not in error

    @pytest.mark.asyncio
    async def test_development_includes_stack(self):
        settings = Settings(_env_file=None, environment="development", log_level="WARNING")
        app = create_app(settings, clock=FakeClock())
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/error")

        assert response.status_code == 500
        assert "SimulatedError" in response.json()["error"]["stack"]

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/nope")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["status"] == 404
        assert error["message"] == "Not Found"
