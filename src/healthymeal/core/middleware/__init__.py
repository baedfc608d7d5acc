"""Custom middleware components."""

from healthymeal.core.middleware.logging import LoggingMiddleware
from healthymeal.core.middleware.request_id import RequestIDMiddleware


__all__ = ["LoggingMiddleware", "RequestIDMiddleware"]
