"""Recipe modification schemas.

``ParsedModification`` is the validated shape of the model's answer;
``ModifiedRecipe`` is the unsaved result handed back to callers.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from healthymeal.schemas.base import APIResponse


class ChangeType(StrEnum):
    """Kind of alteration the model reports."""

    SUBSTITUTION = "substitution"
    ADDITION = "addition"
    REMOVAL = "removal"
    MODIFICATION = "modification"


class ChangeEntry(APIResponse):
    """One alteration made to the recipe.

    List order is the model's own and only meaningful for display.
    """

    type: ChangeType = Field(..., description="Kind of change")
    from_: str = Field(default="", alias="from", description="Original item")
    to: str = Field(default="", description="Replacement item")

    @classmethod
    def from_raw(cls, item: Any) -> ChangeEntry:
        """Build an entry from one loosely-shaped ``changes_summary`` element.

        Unknown change types fall back to ``modification``; a bare string is
        kept as the ``to`` side of a modification.
        """
        if isinstance(item, dict):
            raw_type = str(item.get("type") or "").strip().lower()
            try:
                change_type = ChangeType(raw_type)
            except ValueError:
                change_type = ChangeType.MODIFICATION
            return cls(
                type=change_type,
                from_=_as_text(item.get("from")),
                to=_as_text(item.get("to")),
            )
        return cls(type=ChangeType.MODIFICATION, from_="", to=_as_text(item))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class ParsedModification(BaseModel):
    """Validated JSON payload returned by the model.

    ``changes_summary`` elements are kept as-is; their shape is only
    normalized when the result is assembled.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    ingredients: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1)
    changes_summary: list[Any]


class ModifiedRecipe(APIResponse):
    """An AI-modified recipe that has not been persisted.

    Carries no id or timestamps; saving it is a separate operation.
    """

    title: str
    ingredients: str
    instructions: str
    changes_summary: list[ChangeEntry]
    original_recipe_id: UUID

    @classmethod
    def from_parsed(
        cls, parsed: ParsedModification, original_recipe_id: UUID
    ) -> ModifiedRecipe:
        """Assemble the result from a parsed model answer."""
        return cls(
            title=parsed.title,
            ingredients=parsed.ingredients,
            instructions=parsed.instructions,
            changes_summary=[ChangeEntry.from_raw(item) for item in parsed.changes_summary],
            original_recipe_id=original_recipe_id,
        )


class ModificationRequest(BaseModel):
    """One modification call: who asked, for which recipe, and the rendered prompt."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    recipe_id: UUID
    prompt: str = Field(..., min_length=1)
