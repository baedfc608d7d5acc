"""In-memory collaborators for the recipe modification service."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from uuid import UUID

    from healthymeal.schemas.audit import AuditLogEntry
    from healthymeal.schemas.profile import DietaryProfile
    from healthymeal.schemas.recipe import Recipe


class InMemoryRecipeSource:
    """Recipe lookup backed by a dict keyed by recipe id.

    Recipes owned by another user are reported as absent.
    """

    def __init__(self, *recipes: Recipe) -> None:
        self.recipes = {recipe.id: recipe for recipe in recipes}
        self.calls: list[tuple[UUID, UUID]] = []

    async def get_by_id(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        self.calls.append((user_id, recipe_id))
        recipe = self.recipes.get(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            return None
        return recipe


class InMemoryProfileSource:
    """Profile lookup backed by a dict keyed by user id."""

    def __init__(self, *profiles: DietaryProfile) -> None:
        self.profiles = {profile.user_id: profile for profile in profiles}

    async def get_by_user_id(self, user_id: UUID) -> DietaryProfile | None:
        return self.profiles.get(user_id)


class InMemoryAuditSink:
    """Audit sink collecting entries in a list."""

    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []

    async def record(self, entry: AuditLogEntry) -> None:
        self.entries.append(entry)


class FailingAuditSink:
    """Audit sink whose every write fails."""

    def __init__(self) -> None:
        self.attempts = 0

    async def record(self, entry: AuditLogEntry) -> None:
        self.attempts += 1
        msg = "audit table is unavailable"
        raise RuntimeError(msg)


class BlockingAuditSink:
    """Audit sink that waits until ``release`` is set before storing."""

    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.entries: list[AuditLogEntry] = []

    async def record(self, entry: AuditLogEntry) -> None:
        await self.release.wait()
        self.entries.append(entry)
