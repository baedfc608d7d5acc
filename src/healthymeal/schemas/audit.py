"""Audit log records for modification attempts."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from healthymeal.schemas.profile import DietaryProfile


class PreferencesSnapshot(BaseModel):
    """Immutable copy of a profile's preferences at call time.

    Stored with each audit entry so later profile edits do not rewrite
    history.
    """

    model_config = ConfigDict(frozen=True)

    allergies: tuple[str, ...] = ()
    diets: tuple[str, ...] = ()
    disliked_ingredients: tuple[str, ...] = ()

    @classmethod
    def from_profile(cls, profile: DietaryProfile) -> PreferencesSnapshot:
        """Copy the three preference groups out of a profile by value."""
        return cls(
            allergies=tuple(profile.allergies),
            diets=tuple(profile.diets),
            disliked_ingredients=tuple(profile.disliked_ingredients),
        )


class AuditLogEntry(BaseModel):
    """Record of one modification attempt (successful or not)."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    original_recipe_id: UUID
    modified_recipe_id: UUID | None = None
    preferences_snapshot: PreferencesSnapshot
    model: str
    processing_time_ms: int = Field(..., ge=0)
    was_successful: bool
    error_message: str | None = None
