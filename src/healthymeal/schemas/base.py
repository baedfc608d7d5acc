"""Base schema configuration for API-facing Pydantic models.

``APIResponse`` is the base for outgoing response bodies. Internal domain
records (recipes, profiles, audit entries) use plain frozen ``BaseModel``
subclasses instead; they never cross the HTTP boundary as-is.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIResponse(BaseModel):
    """Base class for outgoing API response schemas (extra fields forbidden)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
        serialize_by_alias=True,
        extra="forbid",
    )
