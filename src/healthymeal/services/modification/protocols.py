"""Collaborator interfaces consumed by the modification service.

Storage-backed implementations live in ``healthymeal.database.repositories``;
tests substitute in-memory fakes or mocks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from uuid import UUID

    from healthymeal.schemas.audit import AuditLogEntry
    from healthymeal.schemas.profile import DietaryProfile
    from healthymeal.schemas.recipe import Recipe


@runtime_checkable
class RecipeSource(Protocol):
    """Looks up a recipe owned by a given user."""

    async def get_by_id(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Return the recipe, or None if absent or owned by someone else."""
        ...


@runtime_checkable
class ProfileSource(Protocol):
    """Looks up a user's dietary profile."""

    async def get_by_user_id(self, user_id: UUID) -> DietaryProfile | None:
        """Return the profile, or None if onboarding is not complete."""
        ...


@runtime_checkable
class AuditLogSink(Protocol):
    """Persists audit log entries."""

    async def record(self, entry: AuditLogEntry) -> None:
        """Store one entry. May raise; callers must not depend on it."""
        ...
