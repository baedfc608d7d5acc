"""Dietary profile record as read from storage."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DietaryProfile(BaseModel):
    """A user's dietary preferences.

    An absent profile (onboarding not completed) is represented by ``None``
    at the repository boundary, never by an empty profile.
    """

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    allergies: list[str] = Field(default_factory=list)
    diets: list[str] = Field(default_factory=list)
    disliked_ingredients: list[str] = Field(default_factory=list)

    @property
    def has_preferences(self) -> bool:
        """Whether any preference group is non-empty."""
        return bool(self.allergies or self.diets or self.disliked_ingredients)
