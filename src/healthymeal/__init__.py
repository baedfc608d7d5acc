"""HealthyMeal recipe modification service.

Adapts a user's saved recipe to their dietary profile (allergies, diets,
disliked ingredients) by asking an LLM for a structured rewrite.
"""

__version__ = "0.1.0"
