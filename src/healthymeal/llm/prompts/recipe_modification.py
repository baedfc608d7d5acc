"""Recipe modification prompt.

Renders a recipe and the user's dietary profile into one instruction block
that asks the model for a JSON rewrite plus a list of the changes it made.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel

from healthymeal.schemas.modification import ParsedModification

from .base import BasePrompt


if TYPE_CHECKING:
    from collections.abc import Iterable

    from healthymeal.schemas.profile import DietaryProfile
    from healthymeal.schemas.recipe import Recipe


NO_PREFERENCES_LINE = "No specific preferences"

_OUTPUT_CONTRACT = """{
  "title": "Modified recipe title (indicate what was changed)",
  "ingredients": "Modified ingredients list",
  "instructions": "Modified cooking instructions",
  "changes_summary": [
    {"type": "substitution", "from": "original ingredient", "to": "replacement ingredient"},
    {"type": "removal", "from": "removed ingredient", "to": ""},
    {"type": "addition", "from": "", "to": "added ingredient"},
    {"type": "modification", "from": "original step", "to": "adjusted step"}
  ]
}"""


def _clean(tags: Iterable[str]) -> list[str]:
    return [tag.strip() for tag in tags if tag and tag.strip()]


def render_preferences(profile: DietaryProfile) -> str:
    """Summarize a profile as one line per non-empty preference group.

    Returns the single ``No specific preferences`` line when every group is
    empty, so the prompt never carries an empty header.
    """
    lines: list[str] = []

    allergies = _clean(profile.allergies)
    if allergies:
        lines.append(f"Allergies: {', '.join(allergies)}")

    diets = _clean(profile.diets)
    if diets:
        lines.append(f"Dietary preferences: {', '.join(diets)}")

    disliked = _clean(profile.disliked_ingredients)
    if disliked:
        lines.append(f"Disliked ingredients: {', '.join(disliked)}")

    return "\n".join(lines) if lines else NO_PREFERENCES_LINE


class RecipeModificationPrompt(BasePrompt[ParsedModification]):
    """Prompt for adapting a recipe to a dietary profile.

    Example input:
        recipe=Recipe(title="Pasta", ingredients="pasta, shrimp, butter", ...),
        profile=DietaryProfile(allergies=["shellfish"], ...)

    Example output:
        {
            "title": "Shellfish-free Pasta",
            "ingredients": "pasta, mushrooms, butter",
            "instructions": "boil, sauté, combine",
            "changes_summary": [
                {"type": "substitution", "from": "shrimp", "to": "mushrooms"}
            ]
        }
    """

    output_schema: ClassVar[type[BaseModel]] = ParsedModification

    system_prompt: ClassVar[str | None] = (
        "You are a helpful cooking assistant. You adapt recipes to a person's "
        "allergies, diets and dislikes while keeping the dish recognizable. "
        "You always answer with a single JSON object and nothing else."
    )

    temperature: ClassVar[float] = 0.7
    max_tokens: ClassVar[int | None] = 2000

    def format(self, **kwargs: Any) -> str:
        """Format the prompt with a recipe and a dietary profile.

        Args:
            **kwargs: Must contain 'recipe' and 'profile'.

        Returns:
            Formatted prompt string. Identical inputs give identical output.

        Raises:
            ValueError: If 'recipe' or 'profile' is missing.
        """
        recipe: Recipe | None = kwargs.get("recipe")
        profile: DietaryProfile | None = kwargs.get("profile")
        if recipe is None or profile is None:
            msg = "Missing required 'recipe' or 'profile' argument"
            raise ValueError(msg)

        return f"""Modify the following recipe to accommodate the user's dietary preferences and restrictions.

Original Recipe:
Title: {recipe.title}
Ingredients: {recipe.ingredients}
Instructions: {recipe.instructions}

User Preferences:
{render_preferences(profile)}

Return a JSON object with exactly this structure:
{_OUTPUT_CONTRACT}

Rules:
1. Respond with the JSON object only - no prose, markdown or code fences outside it
2. Completely remove every ingredient that matches a stated allergy, including derived products
3. Substitute ingredients so the recipe is consistent with every stated diet
4. Replace disliked ingredients where a reasonable alternative exists
5. Record every alteration in "changes_summary" using type substitution, addition, removal or modification
6. Keep the recipe recognizable and the instructions consistent with the new ingredients"""

    def build(self, recipe: Recipe, profile: DietaryProfile) -> str:
        """Render the instruction block for one recipe/profile pair."""
        return self.format(recipe=recipe, profile=profile)
