"""Exceptions for the recipe modification service.

Every failure of a modification call is a ``ModificationError`` whose
``kind`` is one member of the closed ``ModificationErrorKind`` set. Callers
(e.g. the HTTP layer) match on ``kind`` rather than on message text.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from healthymeal.llm.exceptions import (
    AuthError,
    BadRequestError,
    ModelClientError,
    ModelServiceError,
    ParsingError,
    RateLimitError,
)


class ModificationErrorKind(StrEnum):
    """Closed set of failure categories for a modification call."""

    NOT_FOUND = "not_found"
    AUTH_FAILED = "auth_failed"
    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INVALID_RESPONSE = "invalid_response"

    @property
    def retryable(self) -> bool:
        """Whether retrying the same call later can succeed."""
        return self in (
            ModificationErrorKind.RATE_LIMITED,
            ModificationErrorKind.SERVICE_UNAVAILABLE,
        )


class ModificationError(Exception):
    """Base exception for modification service errors."""

    kind: ClassVar[ModificationErrorKind]

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            cause: Optional underlying exception.
        """
        self.message = message
        self.cause = cause
        super().__init__(message)


class NotFoundError(ModificationError):
    """Raised when the recipe or the dietary profile is absent.

    A recipe owned by someone else is reported the same way as a missing
    one; the repository makes that call.
    """

    kind = ModificationErrorKind.NOT_FOUND

    def __init__(self, resource: str, message: str, hint: str | None = None) -> None:
        self.resource = resource
        self.hint = hint
        super().__init__(message)


class AIServiceAuthError(ModificationError):
    """The model service rejected our credentials."""

    kind = ModificationErrorKind.AUTH_FAILED


class AIServiceRateLimitError(ModificationError):
    """The model service throttled the request."""

    kind = ModificationErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        retry_after: float | None = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message, cause)


class AIServiceBadRequestError(ModificationError):
    """The model service rejected our request payload as malformed."""

    kind = ModificationErrorKind.BAD_REQUEST


class AIServiceUnavailableError(ModificationError):
    """The model service is down, erroring, unreachable or too slow."""

    kind = ModificationErrorKind.SERVICE_UNAVAILABLE


class AIServiceError(ModificationError):
    """The model service answered 2xx but its payload broke the contract."""

    kind = ModificationErrorKind.INVALID_RESPONSE

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        raw_excerpt: str | None = None,
    ) -> None:
        self.raw_excerpt = raw_excerpt
        super().__init__(message, cause)


def classify_client_error(error: ModelClientError) -> ModificationError:
    """Map a model-client error onto the modification error taxonomy.

    Args:
        error: Error raised by the model-service client.

    Returns:
        The matching ``ModificationError`` with ``error`` as its cause.
    """
    match error:
        case AuthError():
            return AIServiceAuthError(f"AI service rejected credentials: {error}", error)
        case RateLimitError():
            return AIServiceRateLimitError(
                f"AI service rate limited: {error}", error, retry_after=error.retry_after
            )
        case BadRequestError():
            return AIServiceBadRequestError(f"AI service rejected request: {error}", error)
        case ParsingError():
            return AIServiceError(
                f"Failed to parse AI response: {error}", error, raw_excerpt=error.raw_excerpt
            )
        case ModelServiceError():
            return AIServiceUnavailableError(f"AI service unavailable: {error}", error)
        case _:
            return AIServiceUnavailableError(f"AI service failed: {error}", error)
