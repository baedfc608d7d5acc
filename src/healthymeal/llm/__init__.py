"""LLM integration module.

Provides the chat-completion client used for recipe modification, its
error taxonomy, wire models and prompt templates.
"""

from healthymeal.llm.client.openrouter import OpenRouterClient
from healthymeal.llm.client.protocol import ModelClientProtocol
from healthymeal.llm.exceptions import (
    AuthError,
    BadRequestError,
    ConfigurationError,
    ModelClientError,
    ModelServiceError,
    ParsingError,
    RateLimitError,
)
from healthymeal.llm.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ChatRole,
    ResponseFormat,
)


__all__ = [
    "AuthError",
    "BadRequestError",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "ChatRole",
    "ConfigurationError",
    "ModelClientError",
    "ModelClientProtocol",
    "ModelServiceError",
    "OpenRouterClient",
    "ParsingError",
    "RateLimitError",
    "ResponseFormat",
]
