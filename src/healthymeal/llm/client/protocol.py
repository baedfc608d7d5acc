"""Model-service client protocol.

The orchestrator depends on this interface rather than on a concrete
provider, so tests can substitute a fake and deployments can swap vendors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from healthymeal.llm.models import ChatCompletionRequest, ChatCompletionResponse


@runtime_checkable
class ModelClientProtocol(Protocol):
    """Protocol for chat-completion clients."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connection pool)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send one chat-completion request.

        Raises:
            AuthError: 401 from the service.
            RateLimitError: 429 from the service.
            BadRequestError: 400 from the service.
            ModelServiceError: 5xx, other non-2xx, transport failure or timeout.
            ParsingError: 2xx whose body or structured content is malformed.
        """
        ...
