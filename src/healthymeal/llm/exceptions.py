"""Model-service client exceptions.

Every failure of a chat-completion call surfaces as exactly one of these
classes. The client never retries; retry policy belongs to the caller, and
the docstrings below state which errors are worth retrying.
"""

from __future__ import annotations


class ModelClientError(Exception):
    """Base exception for model-service client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ModelClientError):
    """Raised when the client is constructed without usable settings."""


class AuthError(ModelClientError):
    """Raised on HTTP 401: the API key is invalid or revoked.

    Fatal and operator-actionable; never retried automatically.
    """


class RateLimitError(ModelClientError):
    """Raised on HTTP 429. Callers may retry after backing off."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(message)


class BadRequestError(ModelClientError):
    """Raised on HTTP 400: our request payload was malformed.

    Indicates a bug on the calling side, so it is not retryable.
    """


class ModelServiceError(ModelClientError):
    """Raised when the model service is unavailable.

    Covers 5xx responses, any other unexpected status, transport failures
    and deadline expiry. Retryable by the caller.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ParsingError(ModelClientError):
    """Raised when a 2xx response violates the expected content contract.

    ``raw_excerpt`` keeps the beginning of the offending payload for
    diagnosing prompt or model regressions.
    """

    def __init__(self, message: str, raw_excerpt: str | None = None) -> None:
        self.raw_excerpt = raw_excerpt
        super().__init__(message)
