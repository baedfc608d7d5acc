"""Recipe repository.

Lookups are always scoped to the owning user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from healthymeal.database.repositories.base import PoolRepository
from healthymeal.observability.logging import get_logger
from healthymeal.schemas.recipe import Recipe


if TYPE_CHECKING:
    from uuid import UUID

logger = get_logger(__name__)


_RECIPE_BY_OWNER_QUERY = """
    SELECT id, user_id, title, ingredients, instructions, original_recipe_id
    FROM recipes
    WHERE id = $1 AND user_id = $2
"""


class RecipeRepository(PoolRepository):
    """Reads recipes from the ``recipes`` table."""

    async def get_by_id(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Get a recipe owned by ``user_id``.

        Returns:
            The recipe, or None when it does not exist or belongs to
            another user. The two cases are deliberately indistinguishable.
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_RECIPE_BY_OWNER_QUERY, recipe_id, user_id)

        if row is None:
            logger.debug("Recipe lookup missed", user_id=str(user_id), recipe_id=str(recipe_id))
            return None

        return Recipe(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            ingredients=row["ingredients"],
            instructions=row["instructions"],
            original_recipe_id=row["original_recipe_id"],
        )
