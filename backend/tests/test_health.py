"""
ETTU Backend — Health Endpoint Tests
======================================

What we test:
    ✅ Connected database → 200 healthy / connected
    ✅ Probe failure → 503 unhealthy / disconnected with the error text
    ✅ Database-less mode → 200 healthy / not_configured
    ✅ Version, environment, timestamp and uptime in every body
"""

from datetime import datetime

import pytest

from ettu import __version__


class TestHealthEndpoint:

    @pytest.mark.asyncio
    async def test_connected(self, make_app, make_client, mock_database):
        app = make_app()
        app.state.database = mock_database

        async with make_client(app) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "error" not in body
        mock_database.health_check.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_probe_failure_is_unhealthy(self, make_app, make_client, mock_database):
        mock_database.health_check.side_effect = ConnectionError("connection refused")
        app = make_app()
        app.state.database = mock_database

        async with make_client(app) as client:
            response = await client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
        assert "connection refused" in body["error"]

    @pytest.mark.asyncio
    async def test_database_less_mode(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "not_configured"

    @pytest.mark.asyncio
    async def test_body_metadata(self, make_app, make_client):
        app = make_app(environment="staging")

        async with make_client(app) as client:
            body = (await client.get("/health")).json()

        assert body["version"] == __version__
        assert body["environment"] == "staging"
        assert body["uptime_seconds"] >= 0
        assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00")).tzinfo is not None
