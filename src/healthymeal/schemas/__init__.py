"""Pydantic schemas for domain records and API payloads."""

from healthymeal.schemas.audit import AuditLogEntry, PreferencesSnapshot
from healthymeal.schemas.base import APIResponse
from healthymeal.schemas.modification import (
    ChangeEntry,
    ChangeType,
    ModificationRequest,
    ModifiedRecipe,
    ParsedModification,
)
from healthymeal.schemas.profile import DietaryProfile
from healthymeal.schemas.recipe import Recipe


__all__ = [
    "APIResponse",
    "AuditLogEntry",
    "ChangeEntry",
    "ChangeType",
    "DietaryProfile",
    "ModificationRequest",
    "ModifiedRecipe",
    "ParsedModification",
    "PreferencesSnapshot",
    "Recipe",
]
