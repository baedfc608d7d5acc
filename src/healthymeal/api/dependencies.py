"""FastAPI dependencies for service access and caller identity.

Services are initialized during application startup and stored in
app.state. Authentication happens upstream; the gateway forwards the
authenticated user id in a header.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import HTTPException, Request, status

from healthymeal.core.config import Settings, get_settings
from healthymeal.core.exceptions import UnauthorizedException
from healthymeal.observability.logging import bind_context
from healthymeal.services.modification import RecipeModificationService


def _get_app_settings(request: Request) -> Settings:
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


async def get_current_user_id(request: Request) -> UUID:
    """Read the authenticated user id forwarded by the gateway.

    The id is bound into the logging context for the rest of the request.

    Raises:
        UnauthorizedException: If the header is missing or not a UUID.
    """
    header = _get_app_settings(request).auth.user_id_header
    raw = request.headers.get(header)
    if not raw:
        raise UnauthorizedException()
    try:
        user_id = UUID(raw.strip())
    except ValueError:
        msg = "Invalid user identity"
        raise UnauthorizedException(msg) from None

    bind_context(user_id=str(user_id))
    return user_id


async def get_modification_service(request: Request) -> RecipeModificationService:
    """Get the recipe modification service from app state.

    Raises:
        HTTPException: 503 if service is not initialized.
    """
    service: RecipeModificationService | None = getattr(
        request.app.state, "modification_service", None
    )
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe modification service not available",
        )
    return service
