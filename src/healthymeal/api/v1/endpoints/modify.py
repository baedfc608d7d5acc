"""Recipe modification endpoint."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from healthymeal.api.dependencies import get_current_user_id, get_modification_service
from healthymeal.schemas.modification import ModifiedRecipe
from healthymeal.services.modification import RecipeModificationService


router = APIRouter(tags=["recipes"])


@router.post(
    "/recipes/{recipeId}/modify",
    response_model=ModifiedRecipe,
    status_code=status.HTTP_200_OK,
    summary="Adapt a recipe to the user's dietary profile",
    description=(
        "Generates a modified version of one of the caller's recipes that "
        "respects their allergies, diets and disliked ingredients. The result "
        "is not saved."
    ),
    responses={
        401: {"description": "Missing or invalid user identity"},
        404: {
            "description": "Recipe or dietary profile not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": "NOT_FOUND",
                        "message": (
                            "User profile not found. Please complete your "
                            "profile setup first."
                        ),
                    }
                }
            },
        },
        500: {"description": "AI service returned an unusable response"},
        503: {
            "description": "AI service unavailable or rate limited",
            "headers": {
                "Retry-After": {
                    "description": "Seconds to wait before retrying, when known",
                    "schema": {"type": "integer"},
                }
            },
        },
    },
)
async def modify_recipe(
    recipe_id: Annotated[UUID, Path(alias="recipeId")],
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    service: Annotated[RecipeModificationService, Depends(get_modification_service)],
) -> ModifiedRecipe:
    """Return an AI-modified copy of a recipe.

    Errors raised by the service are translated by the application's
    exception handlers.
    """
    return await service.modify(user_id, recipe_id)
