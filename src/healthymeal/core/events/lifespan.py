"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: logging, model client, database pool, services
- Application shutdown: drain audit writes, close client and pool
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from healthymeal.core.config import Settings, get_settings
from healthymeal.database.connection import close_database_pool, init_database_pool
from healthymeal.database.repositories import (
    AuditLogRepository,
    ProfileRepository,
    RecipeRepository,
)
from healthymeal.llm.client.openrouter import OpenRouterClient
from healthymeal.observability.logging import get_logger, setup_logging
from healthymeal.services.modification import AuditRecorder, RecipeModificationService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _init_model_client(settings: Settings) -> OpenRouterClient | None:
    """Create the OpenRouter client; None when it cannot be configured."""
    openrouter = settings.llm.openrouter
    try:
        client = OpenRouterClient(
            api_key=settings.OPENROUTER_API_KEY,
            model=openrouter.model,
            base_url=openrouter.url,
            timeout=openrouter.timeout,
            app_referer=openrouter.app_referer,
            app_title=openrouter.app_title,
        )
        await client.initialize()
    except Exception:
        logger.exception("Failed to initialize model client - recipe modification unavailable")
        return None

    logger.info("Model client initialized", model=openrouter.model, base_url=openrouter.url)
    return client


async def _init_database() -> bool:
    """Open the database pool. Returns whether it is usable."""
    try:
        await init_database_pool()
    except Exception:
        logger.exception("Failed to initialize database - recipe modification unavailable")
        return False
    return True


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    app.state.model_client = await _init_model_client(settings)
    app.state.database_ready = await _init_database()
    app.state.modification_service = None

    if app.state.model_client is not None and app.state.database_ready:
        app.state.modification_service = RecipeModificationService(
            recipe_source=RecipeRepository(),
            profile_source=ProfileRepository(),
            model_client=app.state.model_client,
            audit_recorder=AuditRecorder(AuditLogRepository()),
            model=settings.llm.openrouter.model,
            temperature=settings.modification.temperature,
            max_tokens=settings.modification.max_tokens,
            structured_output=settings.modification.structured_output,
            excerpt_chars=settings.modification.response_excerpt_chars,
            audit_drain_timeout=settings.modification.audit_drain_timeout,
        )
        logger.info("RecipeModificationService initialized")

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    service: RecipeModificationService | None = getattr(
        app.state, "modification_service", None
    )
    if service is not None:
        await service.shutdown()

    client: OpenRouterClient | None = getattr(app.state, "model_client", None)
    if client is not None:
        await client.shutdown()
        logger.debug("Model client shutdown")

    if getattr(app.state, "database_ready", False):
        await close_database_pool()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings | None = getattr(app.state, "settings", None)
    if settings is None:
        settings = get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
