"""Shared test fixtures.

Provides sample domain records and resets cached settings between tests.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING
from uuid import UUID

import pytest

from healthymeal.core.config import get_settings
from healthymeal.schemas.profile import DietaryProfile
from healthymeal.schemas.recipe import Recipe
from tests.fixtures.fakes import InMemoryAuditSink


if TYPE_CHECKING:
    from collections.abc import Generator

os.environ.setdefault("APP_ENV", "test")

USER_ID = UUID("11111111-1111-4111-8111-111111111111")
RECIPE_ID = UUID("33333333-3333-4333-8333-333333333333")


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Ensure each test sees freshly loaded settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def user_id() -> UUID:
    """Owner of the sample recipe."""
    return USER_ID


@pytest.fixture
def recipe_id() -> UUID:
    """Id of the sample recipe."""
    return RECIPE_ID


@pytest.fixture
def sample_recipe() -> Recipe:
    """A shrimp pasta owned by USER_ID."""
    return Recipe(
        id=RECIPE_ID,
        user_id=USER_ID,
        title="Garlic Shrimp Pasta",
        ingredients="200g spaghetti, 200g shrimp, 2 cloves garlic, 30g butter",
        instructions="Boil the pasta. Fry shrimp and garlic in butter. Toss together.",
    )


@pytest.fixture
def sample_profile() -> DietaryProfile:
    """A profile with one preference in each group."""
    return DietaryProfile(
        user_id=USER_ID,
        allergies=["shellfish"],
        diets=["dairy-free"],
        disliked_ingredients=["cilantro"],
    )


@pytest.fixture
def empty_profile() -> DietaryProfile:
    """A completed profile with no preferences at all."""
    return DietaryProfile(user_id=USER_ID)


@pytest.fixture
def audit_sink() -> InMemoryAuditSink:
    """Audit sink that keeps entries in memory."""
    return InMemoryAuditSink()
