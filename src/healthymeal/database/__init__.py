"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Repository classes for recipes, profiles and the audit log
- Health check utilities
"""

from healthymeal.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from healthymeal.database.repositories import (
    AuditLogRepository,
    ProfileRepository,
    RecipeRepository,
)


__all__ = [
    "AuditLogRepository",
    "ProfileRepository",
    "RecipeRepository",
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
]
