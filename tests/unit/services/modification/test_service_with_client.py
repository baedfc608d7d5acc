"""Tests running RecipeModificationService against a mocked OpenRouter API."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from healthymeal.llm.client.openrouter import OpenRouterClient
from healthymeal.schemas.modification import ChangeType
from healthymeal.services.modification import (
    AIServiceError,
    AIServiceUnavailableError,
    AuditRecorder,
    ModificationErrorKind,
    RecipeModificationService,
)
from tests.fixtures.fakes import InMemoryProfileSource, InMemoryRecipeSource
from tests.fixtures.llm_responses import (
    MODIFICATION_CONTENT,
    create_chat_response,
    create_error_response,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from healthymeal.schemas.profile import DietaryProfile
    from healthymeal.schemas.recipe import Recipe
    from tests.fixtures.fakes import InMemoryAuditSink


pytestmark = pytest.mark.unit

BASE_URL = "https://openrouter.test/api/v1"
CHAT_URL = f"{BASE_URL}/chat/completions"
MODEL = "google/gemini-2.0-flash-exp:free"


@pytest.fixture
async def client() -> AsyncGenerator[OpenRouterClient]:
    """Create an initialized client pointed at the mocked API."""
    client = OpenRouterClient(api_key="test-api-key", model=MODEL, base_url=BASE_URL)
    await client.initialize()
    yield client
    await client.shutdown()


@pytest.fixture
def service(
    client: OpenRouterClient,
    sample_recipe: Recipe,
    sample_profile: DietaryProfile,
    audit_sink: InMemoryAuditSink,
) -> RecipeModificationService:
    """Create a service wired to the real client and in-memory stores."""
    return RecipeModificationService(
        recipe_source=InMemoryRecipeSource(sample_recipe),
        profile_source=InMemoryProfileSource(sample_profile),
        model_client=client,
        audit_recorder=AuditRecorder(audit_sink),
        model=MODEL,
    )


class TestModifyThroughClient:
    """End-to-end behaviour of one modification over HTTP."""

    @respx.mock
    async def test_success(
        self,
        service: RecipeModificationService,
        sample_recipe: Recipe,
        audit_sink: InMemoryAuditSink,
    ) -> None:
        """Should return a recipe with the shellfish substituted."""
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response(MODIFICATION_CONTENT))
        )

        result = await service.modify(sample_recipe.user_id, sample_recipe.id)
        await service.shutdown()

        assert "shrimp" not in result.ingredients.lower()
        assert any(
            change.type in (ChangeType.SUBSTITUTION, ChangeType.REMOVAL)
            and "shrimp" in change.from_.lower()
            for change in result.changes_summary
        )
        assert audit_sink.entries[0].was_successful is True

    @respx.mock
    async def test_upstream_503(
        self,
        service: RecipeModificationService,
        sample_recipe: Recipe,
        audit_sink: InMemoryAuditSink,
    ) -> None:
        """Should report unavailability and audit the failed attempt."""
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(503, json=create_error_response("Upstream down", 503))
        )

        with pytest.raises(AIServiceUnavailableError) as exc_info:
            await service.modify(sample_recipe.user_id, sample_recipe.id)
        await service.shutdown()

        assert exc_info.value.kind is ModificationErrorKind.SERVICE_UNAVAILABLE
        assert len(audit_sink.entries) == 1
        assert audit_sink.entries[0].was_successful is False

    @respx.mock
    async def test_non_json_content(
        self,
        service: RecipeModificationService,
        sample_recipe: Recipe,
        audit_sink: InMemoryAuditSink,
    ) -> None:
        """Should report an invalid answer, distinct from unavailability."""
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response("not json"))
        )

        with pytest.raises(AIServiceError) as exc_info:
            await service.modify(sample_recipe.user_id, sample_recipe.id)
        await service.shutdown()

        assert not isinstance(exc_info.value, AIServiceUnavailableError)
        assert exc_info.value.kind is ModificationErrorKind.INVALID_RESPONSE
        assert audit_sink.entries[0].was_successful is False
