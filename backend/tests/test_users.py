"""
SDLC Demo API — User Route Tests
=================================
"""

import pytest


class TestListUsers:

    @pytest.mark.asyncio
    async def test_lists_seeded_users(self, test_client):
        response = await test_client.get("/api/users")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [u["name"] for u in body["data"]] == ["John Doe", "Jane Smith"]
        assert "createdAt" in body["data"][0]


class TestGetUser:

    @pytest.mark.asyncio
    async def test_returns_user(self, test_client):
        response = await test_client.get("/api/users/2")

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "jane@example.com"

    @pytest.mark.asyncio
    async def test_unknown_user_is_404(self, test_client):
        response = await test_client.get("/api/users/42")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["message"] == "User not found"
        assert error["status"] == 404

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_400(self, test_client):
        response = await test_client.get("/api/users/abc")

        assert response.status_code == 400
        assert response.json()["error"]["status"] == 400


class TestCreateUser:

    @pytest.mark.asyncio
    async def test_creates_user(self, test_client):
        response = await test_client.post(
            "/api/users", json={"name": "Ada Lovelace", "email": "ada@example.com"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["data"]["id"] == 3

        listed = await test_client.get("/api/users")
        assert listed.json()["total"] == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"name": "No Email"}, {"name": "", "email": "x@example.com"}])
    async def test_missing_fields_rejected(self, test_client, payload):
        response = await test_client.post("/api/users", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Name and email are required"

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self, test_client):
        response = await test_client.post(
            "/api/users",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["status"] == 400
