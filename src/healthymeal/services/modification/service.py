"""Recipe modification service.

Provides methods for:
- Loading a user's recipe and dietary profile
- Asking the model service for an adapted recipe
- Validating the answer and recording an audit entry per attempt
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from healthymeal.llm.exceptions import ModelClientError, ParsingError
from healthymeal.llm.models import ChatCompletionRequest, ResponseFormat
from healthymeal.llm.prompts.recipe_modification import RecipeModificationPrompt
from healthymeal.observability.logging import get_logger
from healthymeal.schemas.audit import AuditLogEntry, PreferencesSnapshot
from healthymeal.schemas.modification import ModificationRequest, ModifiedRecipe
from healthymeal.services.modification.constants import (
    DEFAULT_AUDIT_DRAIN_TIMEOUT,
    DEFAULT_EXCERPT_CHARS,
    PROFILE_NOT_FOUND_HINT,
    PROFILE_RESOURCE,
    RECIPE_RESOURCE,
)
from healthymeal.services.modification.exceptions import (
    AIServiceError,
    ModificationError,
    NotFoundError,
    classify_client_error,
)
from healthymeal.services.modification.parser import ResponseParser


if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from healthymeal.llm.client.protocol import ModelClientProtocol
    from healthymeal.schemas.profile import DietaryProfile
    from healthymeal.schemas.recipe import Recipe
    from healthymeal.services.modification.audit import AuditRecorder
    from healthymeal.services.modification.protocols import ProfileSource, RecipeSource

logger = get_logger(__name__)


class RecipeModificationService:
    """Service adapting stored recipes to a user's dietary profile.

    Orchestrates:
    1. Concurrent lookup of the recipe (scoped to its owner) and the profile
    2. Prompt rendering and a single model call (no retries)
    3. Parsing and validation of the model's answer
    4. One audit entry for every attempt that reached the model

    The modified recipe is returned to the caller and never persisted here.
    """

    def __init__(
        self,
        recipe_source: RecipeSource,
        profile_source: ProfileSource,
        model_client: ModelClientProtocol,
        audit_recorder: AuditRecorder,
        *,
        model: str,
        temperature: float = RecipeModificationPrompt.temperature,
        max_tokens: int | None = RecipeModificationPrompt.max_tokens,
        structured_output: bool = True,
        excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
        audit_drain_timeout: float | None = DEFAULT_AUDIT_DRAIN_TIMEOUT,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the service.

        Args:
            recipe_source: Looks up recipes by owner and id.
            profile_source: Looks up dietary profiles by user id.
            model_client: Chat-completion client.
            audit_recorder: Schedules audit log writes.
            model: Model identifier sent with each request and audited.
            temperature: Sampling temperature.
            max_tokens: Completion budget.
            structured_output: Request a JSON object response.
            excerpt_chars: Length of raw-response excerpts kept on errors.
            audit_drain_timeout: Seconds ``shutdown`` waits for pending
                audit writes before cancelling them. None waits indefinitely.
            clock: Monotonic clock in seconds, used for processing time.
        """
        self._recipe_source = recipe_source
        self._profile_source = profile_source
        self._model_client = model_client
        self._audit = audit_recorder
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._structured_output = structured_output
        self._audit_drain_timeout = audit_drain_timeout
        self._clock = clock
        self._prompt = RecipeModificationPrompt()
        self._parser = ResponseParser(excerpt_chars)

    @property
    def model(self) -> str:
        """Model identifier used for requests."""
        return self._model

    async def shutdown(self) -> None:
        """Wait for pending audit writes. Called during application shutdown."""
        await self._audit.drain(timeout=self._audit_drain_timeout)
        logger.info("RecipeModificationService shutdown")

    async def modify(self, user_id: UUID, recipe_id: UUID) -> ModifiedRecipe:
        """Produce an AI-adapted version of one of the user's recipes.

        Args:
            user_id: Authenticated user.
            recipe_id: Recipe to adapt; must belong to ``user_id``.

        Returns:
            The unsaved modified recipe.

        Raises:
            NotFoundError: If the recipe or the profile does not exist.
            ModificationError: For any model-service or parsing failure;
                ``kind`` tells which.
        """
        recipe, profile = await self._load_inputs(user_id, recipe_id)

        request = ModificationRequest(
            user_id=user_id,
            recipe_id=recipe_id,
            prompt=self._prompt.build(recipe, profile),
        )
        snapshot = PreferencesSnapshot.from_profile(profile)

        logger.info(
            "Requesting recipe modification",
            user_id=str(user_id),
            recipe_id=str(recipe_id),
            model=self._model,
            prompt_chars=len(request.prompt),
            has_preferences=profile.has_preferences,
        )

        started = self._clock()
        try:
            response = await self._model_client.complete(self._build_chat_request(request))
        except ModelClientError as e:
            elapsed_ms = self._elapsed_ms(started)
            error = classify_client_error(e)
            self._log_failure(request, error, elapsed_ms)
            self._record(request, snapshot, elapsed_ms, error=error)
            raise error from e
        except Exception as e:
            elapsed_ms = self._elapsed_ms(started)
            logger.exception(
                "Unexpected error calling model service",
                user_id=str(user_id),
                recipe_id=str(recipe_id),
                duration_ms=elapsed_ms,
            )
            self._record(request, snapshot, elapsed_ms, error_message=f"Unexpected error: {e}")
            raise
        elapsed_ms = self._elapsed_ms(started)

        try:
            parsed = self._parser.parse(response.content)
        except ParsingError as e:
            msg = f"Failed to parse AI response: {e}"
            error = AIServiceError(msg, e, raw_excerpt=e.raw_excerpt)
            self._log_failure(request, error, elapsed_ms)
            self._record(request, snapshot, elapsed_ms, error=error)
            raise error from e

        result = ModifiedRecipe.from_parsed(parsed, recipe.id)
        self._record(request, snapshot, elapsed_ms)

        logger.info(
            "Recipe modified",
            user_id=str(user_id),
            recipe_id=str(recipe_id),
            changes=len(result.changes_summary),
            duration_ms=elapsed_ms,
        )
        return result

    async def _load_inputs(
        self, user_id: UUID, recipe_id: UUID
    ) -> tuple[Recipe, DietaryProfile]:
        recipe_task = asyncio.create_task(self._recipe_source.get_by_id(user_id, recipe_id))
        profile_task = asyncio.create_task(self._profile_source.get_by_user_id(user_id))
        tasks = (recipe_task, profile_task)

        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            # Unfinished only on a lookup error or cancellation of this call.
            unfinished = [task for task in tasks if not task.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        errors = [task.exception() for task in tasks if task in done]
        for error in errors:
            if error is not None:
                raise error

        recipe = recipe_task.result()
        profile = profile_task.result()

        if recipe is None:
            logger.info(
                "Recipe not found for user", user_id=str(user_id), recipe_id=str(recipe_id)
            )
            msg = (
                f"Recipe with ID {recipe_id} not found or you do not have "
                "permission to access it"
            )
            raise NotFoundError(RECIPE_RESOURCE, msg)

        if profile is None:
            logger.info("Dietary profile not found", user_id=str(user_id))
            msg = "User profile not found. Please complete your profile setup first."
            raise NotFoundError(PROFILE_RESOURCE, msg, hint=PROFILE_NOT_FOUND_HINT)

        return recipe, profile

    def _build_chat_request(self, request: ModificationRequest) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=self._model,
            messages=self._prompt.to_messages(request.prompt),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            response_format=ResponseFormat() if self._structured_output else None,
        )

    def _elapsed_ms(self, started: float) -> int:
        return max(0, round((self._clock() - started) * 1000))

    def _log_failure(
        self, request: ModificationRequest, error: ModificationError, elapsed_ms: int
    ) -> None:
        extra: dict[str, object] = {}
        if isinstance(error, AIServiceError) and error.raw_excerpt is not None:
            extra["raw_response"] = error.raw_excerpt
        logger.warning(
            "Recipe modification failed",
            user_id=str(request.user_id),
            recipe_id=str(request.recipe_id),
            kind=error.kind.value,
            retryable=error.kind.retryable,
            error=error.message,
            duration_ms=elapsed_ms,
            **extra,
        )

    def _record(
        self,
        request: ModificationRequest,
        snapshot: PreferencesSnapshot,
        elapsed_ms: int,
        *,
        error: ModificationError | None = None,
        error_message: str | None = None,
    ) -> None:
        if error is not None:
            error_message = error.message
            if isinstance(error, AIServiceError) and error.raw_excerpt:
                error_message = f"{error.message} | raw response: {error.raw_excerpt}"

        self._audit.record(
            AuditLogEntry(
                user_id=request.user_id,
                original_recipe_id=request.recipe_id,
                modified_recipe_id=None,
                preferences_snapshot=snapshot,
                model=self._model,
                processing_time_ms=elapsed_ms,
                was_successful=error is None and error_message is None,
                error_message=error_message,
            )
        )
