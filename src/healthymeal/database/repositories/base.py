"""Shared pool handling for repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from healthymeal.database.connection import get_database_pool


if TYPE_CHECKING:
    from asyncpg import Pool


class PoolRepository:
    """Repository bound to an explicit pool or, failing that, the global one."""

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository.

        Args:
            pool: Optional connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()
