"""Database repositories."""

from healthymeal.database.repositories.audit_log import AuditLogRepository
from healthymeal.database.repositories.profile import ProfileRepository
from healthymeal.database.repositories.recipe import RecipeRepository


__all__ = ["AuditLogRepository", "ProfileRepository", "RecipeRepository"]
