"""AI modification audit log repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

from healthymeal.database.repositories.base import PoolRepository


if TYPE_CHECKING:
    from healthymeal.schemas.audit import AuditLogEntry


_INSERT_LOG_QUERY = """
    INSERT INTO ai_modifications_log (
        user_id,
        original_recipe_id,
        modified_recipe_id,
        user_preferences_snapshot,
        ai_model_used,
        processing_time_ms,
        was_successful,
        error_message
    )
    VALUES ($1, $2, $3, $4::jsonb, $5, $6, $7, $8)
"""


class AuditLogRepository(PoolRepository):
    """Appends entries to ``ai_modifications_log``.

    Satisfies the ``AuditLogSink`` protocol; errors propagate to the
    recorder, which reports them.
    """

    async def record(self, entry: AuditLogEntry) -> None:
        """Insert one audit entry."""
        snapshot = orjson.dumps(entry.preferences_snapshot.model_dump(mode="json")).decode()

        async with self.pool.acquire() as conn:
            await conn.execute(
                _INSERT_LOG_QUERY,
                entry.user_id,
                entry.original_recipe_id,
                entry.modified_recipe_id,
                snapshot,
                entry.model,
                entry.processing_time_ms,
                entry.was_successful,
                entry.error_message,
            )
