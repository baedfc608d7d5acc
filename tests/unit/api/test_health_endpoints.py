"""Unit tests for the health endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient, Response

from healthymeal.core.config import get_settings
from healthymeal.factory import create_app


pytestmark = pytest.mark.unit

DB_HEALTH = "healthymeal.api.v1.endpoints.health.check_database_health"


async def get(app: FastAPI, path: str) -> Response:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.get(path)


class TestHealthEndpoints:
    """Tests for /health and /ready."""

    async def test_liveness(self) -> None:
        """Should report healthy without touching dependencies."""
        response = await get(create_app(get_settings()), "/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_ready_when_dependencies_are_up(self) -> None:
        """Should return 200 when the database and model client are usable."""
        app = create_app(get_settings())
        app.state.model_client = MagicMock()

        with patch(DB_HEALTH, new=AsyncMock(return_value={"database": "healthy"})):
            response = await get(app, "/api/v1/ready")

        assert response.status_code == 200
        assert response.json()["dependencies"] == {
            "database": "healthy",
            "model_service": "configured",
        }

    async def test_not_ready_without_model_client(self) -> None:
        """Should return 503 when the model client failed to start."""
        app = create_app(get_settings())
        app.state.model_client = None

        with patch(DB_HEALTH, new=AsyncMock(return_value={"database": "healthy"})):
            response = await get(app, "/api/v1/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    async def test_not_ready_without_database(self) -> None:
        """Should return 503 before the pool is initialized."""
        app = create_app(get_settings())
        app.state.model_client = MagicMock()

        response = await get(app, "/api/v1/ready")

        assert response.status_code == 503
        assert response.json()["dependencies"]["database"] == "not_initialized"
