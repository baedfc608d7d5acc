"""Model-service client implementations."""

from healthymeal.llm.client.openrouter import OpenRouterClient
from healthymeal.llm.client.protocol import ModelClientProtocol


__all__ = [
    "ModelClientProtocol",
    "OpenRouterClient",
]
