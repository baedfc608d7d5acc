"""LLM prompt templates."""

from healthymeal.llm.prompts.base import BasePrompt
from healthymeal.llm.prompts.recipe_modification import (
    NO_PREFERENCES_LINE,
    RecipeModificationPrompt,
    render_preferences,
)


__all__ = [
    "NO_PREFERENCES_LINE",
    "BasePrompt",
    "RecipeModificationPrompt",
    "render_preferences",
]
