"""Fire-and-forget audit log recording.

Writes run as background tasks so a slow or failing sink never delays or
fails the modification call that produced the entry. Sink failures are
reported to the operational log only.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from healthymeal.observability.logging import get_logger


if TYPE_CHECKING:
    from healthymeal.schemas.audit import AuditLogEntry

    from .protocols import AuditLogSink


logger = get_logger(__name__)


class AuditRecorder:
    """Schedules audit log writes without awaiting them.

    Keeps a strong reference to each in-flight write so it is not garbage
    collected before completion; call ``drain`` on shutdown to let pending
    writes finish.
    """

    def __init__(self, sink: AuditLogSink | None) -> None:
        """Initialize the recorder.

        Args:
            sink: Destination for entries. None disables recording.
        """
        self._sink = sink
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def enabled(self) -> bool:
        """Whether entries are forwarded to a sink."""
        return self._sink is not None

    @property
    def pending(self) -> int:
        """Number of writes that have not completed yet."""
        return len(self._pending)

    def record(self, entry: AuditLogEntry) -> None:
        """Schedule ``entry`` to be written. Never raises."""
        if self._sink is None:
            logger.debug(
                "Audit sink disabled, dropping entry",
                user_id=str(entry.user_id),
                recipe_id=str(entry.original_recipe_id),
            )
            return

        task = asyncio.create_task(self._write(self._sink, entry), name="audit-log-write")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, sink: AuditLogSink, entry: AuditLogEntry) -> None:
        try:
            await sink.record(entry)
        except Exception:
            logger.exception(
                "Failed to write audit log entry",
                user_id=str(entry.user_id),
                recipe_id=str(entry.original_recipe_id),
                was_successful=entry.was_successful,
            )
        else:
            logger.debug(
                "Audit log entry written",
                user_id=str(entry.user_id),
                recipe_id=str(entry.original_recipe_id),
                was_successful=entry.was_successful,
            )

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for in-flight writes to finish.

        Args:
            timeout: Maximum seconds to wait. Writes still running after
                that are cancelled.
        """
        if not self._pending:
            return

        logger.info("Draining audit log writes", pending=len(self._pending))
        _, still_pending = await asyncio.wait(set(self._pending), timeout=timeout)
        if still_pending:
            logger.warning("Cancelling unfinished audit log writes", count=len(still_pending))
            for task in still_pending:
                task.cancel()
            await asyncio.gather(*still_pending, return_exceptions=True)
