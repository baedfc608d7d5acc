"""Chat-completion wire models (OpenAI-compatible format)."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ChatRole(StrEnum):
    """Role of a chat message author."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Single message in chat format."""

    model_config = ConfigDict(use_enum_values=True)

    role: ChatRole = Field(..., description="Message role: system, user, or assistant")
    content: str = Field(..., description="Message content")


class ResponseFormat(BaseModel):
    """Requested output format; ``json_object`` asks for structured output."""

    type: str = Field(default="json_object")


class ChatCompletionRequest(BaseModel):
    """Request body for the /chat/completions endpoint."""

    model: str = Field(..., min_length=1, description="Model identifier")
    messages: list[ChatMessage] = Field(..., min_length=1)
    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int | None = Field(default=None, gt=0)
    response_format: ResponseFormat | None = Field(
        default=None,
        description="Set to request structured (JSON) output",
    )

    @property
    def is_structured(self) -> bool:
        """Whether structured JSON output was requested."""
        return self.response_format is not None

    def to_payload(self) -> dict[str, object]:
        """Serialize to the JSON body, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class ResponseMessage(BaseModel):
    """Message returned inside a completion choice."""

    model_config = ConfigDict(extra="ignore")

    role: str | None = None
    content: str | None = None


class CompletionChoice(BaseModel):
    """Single choice in a completion response."""

    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: ResponseMessage
    finish_reason: str | None = None


class CompletionUsage(BaseModel):
    """Token usage reported by the service."""

    model_config = ConfigDict(extra="ignore")

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class ChatCompletionResponse(BaseModel):
    """Response from the /chat/completions endpoint.

    Providers routed through OpenRouter differ in which metadata they fill
    in, so only ``choices`` is required.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str | None = None
    model: str | None = None
    choices: list[CompletionChoice] = Field(..., min_length=1)
    usage: CompletionUsage | None = None

    @property
    def content(self) -> str:
        """Content of the first choice (empty string when absent)."""
        return self.choices[0].message.content or ""
