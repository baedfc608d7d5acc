"""Unit tests for database connection management."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import asyncpg
import pytest

import healthymeal.database.connection as db_module
from healthymeal.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)


pytestmark = pytest.mark.unit


class TestPoolLifecycle:
    """Tests for pool initialization and shutdown."""

    async def test_init_creates_and_verifies_pool(
        self, mock_pool: MagicMock, mock_conn: MagicMock
    ) -> None:
        """Should create the pool with the configured schema and probe it."""
        with patch(
            "healthymeal.database.connection.asyncpg.create_pool",
            new=AsyncMock(return_value=mock_pool),
        ) as create_pool:
            await init_database_pool()

        assert get_database_pool() is mock_pool
        assert create_pool.call_args.kwargs["server_settings"] == {"search_path": "public"}
        mock_conn.fetchval.assert_awaited_once_with("SELECT 1")

    async def test_init_propagates_connection_failure(
        self, mock_pool: MagicMock, mock_conn: MagicMock
    ) -> None:
        """Should raise when the probe query fails."""
        mock_conn.fetchval.side_effect = asyncpg.PostgresError("down")

        with (
            patch(
                "healthymeal.database.connection.asyncpg.create_pool",
                new=AsyncMock(return_value=mock_pool),
            ),
            pytest.raises(asyncpg.PostgresError),
        ):
            await init_database_pool()

    async def test_close_resets_pool(self, mock_pool: MagicMock) -> None:
        """Should close and forget the pool."""
        db_module._pool = mock_pool

        await close_database_pool()

        mock_pool.close.assert_awaited_once()
        with pytest.raises(RuntimeError):
            get_database_pool()


class TestCheckDatabaseHealth:
    """Tests for check_database_health."""

    async def test_not_initialized(self) -> None:
        """Should report a missing pool."""
        assert await check_database_health() == {"database": "not_initialized"}

    async def test_healthy(self, mock_pool: MagicMock) -> None:
        """Should report a pool that answers queries."""
        db_module._pool = mock_pool

        assert await check_database_health() == {"database": "healthy"}

    async def test_unhealthy(self, mock_pool: MagicMock, mock_conn: MagicMock) -> None:
        """Should report a pool whose probe fails."""
        mock_conn.fetchval.side_effect = OSError("connection refused")
        db_module._pool = mock_pool

        assert await check_database_health() == {"database": "unhealthy"}
