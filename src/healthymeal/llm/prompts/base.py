"""Base class for LLM prompts.

Provides a standardized interface for defining prompts with:
- A system prompt and a formatted user prompt
- The output schema the response is validated against
- Default generation options
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from healthymeal.llm.models import ChatMessage, ChatRole

T = TypeVar("T", bound=BaseModel)


class BasePrompt(ABC, Generic[T]):
    """Base class for all LLM prompts.

    Centralizes prompt text so it can be versioned and tested on its own.
    Prompts are pure: ``format`` must not perform I/O or embed anything
    time- or randomness-dependent.
    """

    output_schema: ClassVar[type[BaseModel]]
    """Pydantic model the model's answer is validated against."""

    system_prompt: ClassVar[str | None] = None
    """Optional system prompt to set context for the LLM."""

    temperature: ClassVar[float] = 0.7
    """Default sampling temperature."""

    max_tokens: ClassVar[int | None] = None
    """Default completion budget (None = model default)."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with input variables.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def to_messages(self, prompt: str) -> list[ChatMessage]:
        """Wrap a formatted user prompt, preceded by the system prompt if any."""
        messages: list[ChatMessage] = []
        if self.system_prompt:
            messages.append(ChatMessage(role=ChatRole.SYSTEM, content=self.system_prompt))
        messages.append(ChatMessage(role=ChatRole.USER, content=prompt))
        return messages
