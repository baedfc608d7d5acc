"""Recipe record as read from storage."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    """A user's saved recipe.

    Read-only to the modification pipeline. Ownership is enforced by the
    repository that produced it, not re-checked downstream.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    user_id: UUID
    title: str = Field(..., min_length=1)
    ingredients: str
    instructions: str
    original_recipe_id: UUID | None = None
