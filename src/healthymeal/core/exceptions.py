"""Custom exceptions and exception handlers.

This module provides structured exception handling with:
- Application exceptions for request-level failures
- Translation of modification errors into HTTP responses
- Structured error response models
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from healthymeal.observability.logging import get_logger
from healthymeal.services.modification.exceptions import (
    AIServiceRateLimitError,
    ModificationError,
    ModificationErrorKind,
    NotFoundError,
)


if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Base application exception.

    All request-level exceptions inherit from this class
    for consistent error handling.
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class UnauthorizedException(AppException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="UNAUTHORIZED",
            message=message,
        )


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def modification_error_response(
    exc: ModificationError, request_id: str | None = None
) -> ORJSONResponse:
    """Translate a modification error into an HTTP response.

    Only not-found messages are passed through verbatim; model-service
    failures get a generic message so provider details stay internal.
    """
    headers: dict[str, str] = {}
    details: list[ErrorDetail] | None = None

    match exc.kind:
        case ModificationErrorKind.NOT_FOUND:
            status_code = status.HTTP_404_NOT_FOUND
            error = "NOT_FOUND"
            message = exc.message
            if isinstance(exc, NotFoundError) and exc.hint:
                details = [
                    ErrorDetail(code=f"{exc.resource.upper()}_NOT_FOUND", message=exc.hint)
                ]
        case ModificationErrorKind.SERVICE_UNAVAILABLE:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            error = "AI_SERVICE_UNAVAILABLE"
            message = "AI service is temporarily unavailable. Please try again later."
        case ModificationErrorKind.RATE_LIMITED:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            error = "AI_SERVICE_RATE_LIMITED"
            message = "AI service is busy. Please try again later."
            retry_after = exc.retry_after if isinstance(exc, AIServiceRateLimitError) else None
            if retry_after is not None and math.isfinite(retry_after):
                headers["Retry-After"] = str(max(1, round(retry_after)))
        case (
            ModificationErrorKind.AUTH_FAILED
            | ModificationErrorKind.BAD_REQUEST
            | ModificationErrorKind.INVALID_RESPONSE
        ):
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            error = "AI_SERVICE_ERROR"
            message = "Failed to generate modified recipe. Please try again later."

    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            message=message,
            details=details,
            request_id=request_id,
        ).model_dump(),
        headers=headers or None,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Handle custom application exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.error,
                message=exc.message,
                details=exc.details,
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(ModificationError)
    async def modification_exception_handler(
        request: Request,
        exc: ModificationError,
    ) -> ORJSONResponse:
        """Handle recipe modification failures."""
        log_kwargs: dict[str, Any] = {
            "kind": exc.kind.value,
            "retryable": exc.kind.retryable,
            "path": request.url.path,
        }
        if exc.kind is ModificationErrorKind.NOT_FOUND:
            logger.info("Modification target not found", **log_kwargs)
        else:
            logger.warning("Modification failed", error=exc.message, **log_kwargs)
        return modification_error_response(exc, _get_request_id(request))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error="HTTP_ERROR",
                message=str(exc.detail),
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle Pydantic validation errors."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return ORJSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="VALIDATION_ERROR",
                message="Request validation failed",
                details=details,
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        logger.opt(exception=exc).error("Unhandled exception", path=request.url.path)

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                request_id=_get_request_id(request),
            ).model_dump(),
        )
