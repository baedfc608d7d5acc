"""Unit tests for recipe modification schemas."""

from __future__ import annotations

from uuid import UUID

import pytest

from healthymeal.schemas.audit import PreferencesSnapshot
from healthymeal.schemas.modification import (
    ChangeEntry,
    ChangeType,
    ModifiedRecipe,
    ParsedModification,
)
from healthymeal.schemas.profile import DietaryProfile


pytestmark = pytest.mark.unit

RECIPE_ID = UUID("33333333-3333-4333-8333-333333333333")


class TestChangeEntry:
    """Tests for ChangeEntry.from_raw."""

    def test_well_formed_entry(self) -> None:
        """Should keep type, from and to."""
        entry = ChangeEntry.from_raw({"type": "substitution", "from": "shrimp", "to": "tofu"})

        assert entry.type == ChangeType.SUBSTITUTION
        assert entry.from_ == "shrimp"
        assert entry.to == "tofu"

    def test_type_is_case_insensitive(self) -> None:
        """Should accept upper-case change types."""
        assert ChangeEntry.from_raw({"type": " Removal "}).type == ChangeType.REMOVAL

    def test_unknown_type_becomes_modification(self) -> None:
        """Should fall back to a generic modification."""
        entry = ChangeEntry.from_raw({"type": "swap", "from": "butter", "to": "olive oil"})

        assert entry.type == ChangeType.MODIFICATION
        assert entry.to == "olive oil"

    def test_missing_sides_are_empty(self) -> None:
        """Should default absent from/to values to empty strings."""
        entry = ChangeEntry.from_raw({"type": "addition", "to": None})

        assert entry.from_ == ""
        assert entry.to == ""

    def test_bare_string_entry(self) -> None:
        """Should keep a plain string as the description of the change."""
        entry = ChangeEntry.from_raw("Halved the salt")

        assert entry.type == ChangeType.MODIFICATION
        assert entry.to == "Halved the salt"

    def test_serializes_from_alias(self) -> None:
        """Should expose ``from_`` as ``from`` on the wire."""
        entry = ChangeEntry(type=ChangeType.REMOVAL, from_="cilantro")

        assert entry.model_dump() == {"type": "removal", "from": "cilantro", "to": ""}


class TestModifiedRecipe:
    """Tests for ModifiedRecipe."""

    def test_from_parsed(self) -> None:
        """Should copy the text fields and normalize the change list."""
        parsed = ParsedModification(
            title="Mushroom Pasta",
            ingredients="spaghetti, mushrooms",
            instructions="Cook and toss.",
            changes_summary=[{"type": "substitution", "from": "shrimp", "to": "mushrooms"}],
        )

        recipe = ModifiedRecipe.from_parsed(parsed, RECIPE_ID)

        assert recipe.title == "Mushroom Pasta"
        assert recipe.original_recipe_id == RECIPE_ID
        assert recipe.changes_summary == [
            ChangeEntry(type=ChangeType.SUBSTITUTION, from_="shrimp", to="mushrooms")
        ]

    def test_dumps_camel_case(self) -> None:
        """Should serialize field names in camelCase."""
        recipe = ModifiedRecipe(
            title="t",
            ingredients="i",
            instructions="s",
            changes_summary=[],
            original_recipe_id=RECIPE_ID,
        )

        assert set(recipe.model_dump()) == {
            "title",
            "ingredients",
            "instructions",
            "changesSummary",
            "originalRecipeId",
        }


class TestPreferencesSnapshot:
    """Tests for PreferencesSnapshot."""

    def test_copies_by_value(self) -> None:
        """Should not change when the source lists are mutated."""
        allergies = ["peanuts"]
        profile = DietaryProfile(user_id=RECIPE_ID, allergies=allergies)

        snapshot = PreferencesSnapshot.from_profile(profile)
        profile.allergies.append("shellfish")

        assert snapshot.allergies == ("peanuts",)
