"""Constants for the recipe modification service."""

from __future__ import annotations

from typing import Final


RECIPE_RESOURCE: Final[str] = "recipe"
PROFILE_RESOURCE: Final[str] = "profile"

PROFILE_NOT_FOUND_HINT: Final[str] = "complete onboarding first"

# Upper bound on how much of a bad model answer goes into logs/audit rows
DEFAULT_EXCERPT_CHARS: Final[int] = 500

# Seconds to wait for pending audit writes at shutdown
DEFAULT_AUDIT_DRAIN_TIMEOUT: Final[float] = 10.0
