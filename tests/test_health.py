"""Tests for the health check endpoint."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from tailordesk.api.health import check_database, get_uptime_seconds


class TestHealthCheckEndpoint:
    """Test suite for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_endpoint_returns_200_when_db_ok(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["uptime_seconds"] >= 0
        assert data["checks"]["database"]["status"] == "ok"
        assert isinstance(data["checks"]["database"]["response_time_ms"], int)

    @pytest.mark.asyncio
    async def test_health_endpoint_carries_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"X-Request-ID": "health-check-1"})

        assert response.headers["x-request-id"] == "health-check-1"

    @pytest.mark.asyncio
    async def test_health_endpoint_degraded_when_db_down(self, app, client: AsyncClient) -> None:
        """Test that a failing database reports degraded but still answers 200."""
        from tailordesk.core.db import get_db

        broken = AsyncMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        async def override_get_db():
            yield broken

        app.dependency_overrides[get_db] = override_get_db

        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["checks"]["database"]["status"] == "down"
        assert data["checks"]["database"]["error"] == "OperationalError"


class TestUptime:
    """Test uptime calculation."""

    def test_uptime_before_startup(self) -> None:
        assert get_uptime_seconds(None) == 0

    def test_uptime_tracking(self) -> None:
        one_hour_ago = datetime.now() - timedelta(hours=1)

        uptime = get_uptime_seconds(one_hour_ago)

        assert 3590 <= uptime <= 3610, f"Expected ~3600 seconds, got {uptime}"


class TestCheckDatabase:
    """Test the database check directly."""

    @pytest.mark.asyncio
    async def test_check_database_ok(self, db_session) -> None:
        result = await check_database(db_session)

        assert result["status"] == "ok"
        assert "error" not in result
