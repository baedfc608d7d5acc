"""Dietary profile repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from healthymeal.database.repositories.base import PoolRepository
from healthymeal.schemas.profile import DietaryProfile


if TYPE_CHECKING:
    from uuid import UUID


_PROFILE_QUERY = """
    SELECT user_id, allergies, diets, disliked_ingredients
    FROM profiles
    WHERE user_id = $1
"""


class ProfileRepository(PoolRepository):
    """Reads dietary profiles from the ``profiles`` table."""

    async def get_by_user_id(self, user_id: UUID) -> DietaryProfile | None:
        """Get the profile for ``user_id``, or None if onboarding is incomplete.

        NULL array columns are read as empty lists.
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_PROFILE_QUERY, user_id)

        if row is None:
            return None

        return DietaryProfile(
            user_id=row["user_id"],
            allergies=list(row["allergies"] or []),
            diets=list(row["diets"] or []),
            disliked_ingredients=list(row["disliked_ingredients"] or []),
        )
