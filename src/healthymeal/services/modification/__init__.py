"""Recipe modification service package.

Adapts a user's recipe to their dietary profile with the model service.
"""

from __future__ import annotations

from healthymeal.services.modification.audit import AuditRecorder
from healthymeal.services.modification.exceptions import (
    AIServiceAuthError,
    AIServiceBadRequestError,
    AIServiceError,
    AIServiceRateLimitError,
    AIServiceUnavailableError,
    ModificationError,
    ModificationErrorKind,
    NotFoundError,
    classify_client_error,
)
from healthymeal.services.modification.parser import (
    ResponseParser,
    parse_modification_response,
)
from healthymeal.services.modification.protocols import (
    AuditLogSink,
    ProfileSource,
    RecipeSource,
)
from healthymeal.services.modification.service import RecipeModificationService


__all__ = [
    "AIServiceAuthError",
    "AIServiceBadRequestError",
    "AIServiceError",
    "AIServiceRateLimitError",
    "AIServiceUnavailableError",
    "AuditLogSink",
    "AuditRecorder",
    "ModificationError",
    "ModificationErrorKind",
    "NotFoundError",
    "ProfileSource",
    "RecipeModificationService",
    "RecipeSource",
    "ResponseParser",
    "classify_client_error",
    "parse_modification_response",
]
