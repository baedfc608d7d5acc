"""HTTP client for the OpenRouter chat-completions API.

OpenRouter exposes an OpenAI-compatible ``/chat/completions`` endpoint in
front of many model vendors. This client sends exactly one request per call,
bounds it with a deadline, and turns every failure into one of the classes
in ``healthymeal.llm.exceptions``.
"""

from __future__ import annotations

import asyncio
import math
from typing import TYPE_CHECKING

import httpx
import orjson
from pydantic import ValidationError

from healthymeal.llm.exceptions import (
    AuthError,
    BadRequestError,
    ConfigurationError,
    ModelServiceError,
    ParsingError,
    RateLimitError,
)
from healthymeal.llm.models import ChatCompletionResponse
from healthymeal.observability.logging import get_logger


if TYPE_CHECKING:
    from healthymeal.llm.models import ChatCompletionRequest


logger = get_logger(__name__)

RAW_EXCERPT_CHARS = 500


def _parse_retry_after(value: str | None) -> float | None:
    """Read a Retry-After header given in seconds (HTTP-date form is ignored).

    Values that are not finite numbers (``inf``, ``nan``, ``1e400``) are
    treated as absent.
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    if not math.isfinite(seconds):
        return None
    return max(seconds, 0.0)


class OpenRouterClient:
    """Async HTTP client for OpenRouter.

    Holds only immutable configuration plus a pooled ``httpx.AsyncClient``,
    so one instance is shared by all concurrent orchestration calls.

    Cancellation: the request runs inside ``asyncio.timeout(self.timeout)``.
    If the caller's task is cancelled (e.g. the hosting request was aborted)
    the in-flight HTTP exchange is abandoned and ``CancelledError`` propagates
    untouched.

    Attributes:
        base_url: OpenRouter API base URL.
        model: Default model identifier.
        timeout: Deadline for one request, in seconds.
    """

    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
    DEFAULT_MODEL = "google/gemini-2.0-flash-exp:free"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        app_referer: str | None = None,
        app_title: str | None = None,
    ) -> None:
        """Initialize the OpenRouter client.

        Args:
            api_key: OpenRouter API key. Must be non-empty.
            model: Default model identifier.
            base_url: API base URL.
            timeout: Per-request deadline in seconds (default: 60).
            app_referer: Optional ``HTTP-Referer`` attribution header.
            app_title: Optional ``X-Title`` attribution header.

        Raises:
            ConfigurationError: If the API key is missing or blank.
        """
        if not api_key or not api_key.strip():
            msg = "OpenRouter API key is required for client initialization"
            raise ConfigurationError(msg)
        if timeout <= 0:
            msg = f"Timeout must be positive, got {timeout}"
            raise ConfigurationError(msg)

        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.app_referer = app_referer
        self.app_title = app_title
        self._http_client: httpx.AsyncClient | None = None

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if self.app_referer:
            headers["HTTP-Referer"] = self.app_referer
        if self.app_title:
            headers["X-Title"] = self.app_title
        return headers

    async def initialize(self) -> None:
        """Create the pooled HTTP client with auth headers."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=self._build_headers(),
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
            ),
        )
        logger.info(
            "OpenRouterClient initialized",
            model=self.model,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("OpenRouterClient shutdown")

    async def complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send one chat-completion request.

        Args:
            request: Model, messages and generation parameters. Setting
                ``response_format`` requests structured output, in which case
                the message content is additionally checked to be valid JSON.

        Returns:
            The validated completion response.

        Raises:
            AuthError: 401 from the service.
            RateLimitError: 429 from the service.
            BadRequestError: 400 from the service.
            ModelServiceError: 5xx, other non-2xx, transport failure or timeout.
            ParsingError: 2xx whose body or structured content is malformed.
        """
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        logger.debug(
            "Sending chat completion request",
            model=request.model,
            structured=request.is_structured,
            messages=len(request.messages),
        )

        try:
            async with asyncio.timeout(self.timeout):
                response = await self._http_client.post(
                    self.chat_url,
                    json=request.to_payload(),
                )
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning(
                "Chat completion request timed out",
                model=request.model,
                timeout=self.timeout,
            )
            msg = f"Request timeout after {self.timeout}s"
            raise ModelServiceError(msg) from e
        except httpx.RequestError as e:
            logger.warning(
                "Chat completion transport failure",
                model=request.model,
                error=str(e),
            )
            msg = f"Network error: {e}"
            raise ModelServiceError(msg) from e

        if not response.is_success:
            self._raise_for_status(response)

        return self._parse_response(response, request)

    def _extract_error_message(self, response: httpx.Response) -> str:
        """Best-effort error message: ``error.message``, ``message``, reason phrase."""
        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            return response.reason_phrase

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str) and error:
                return error
            if body.get("message"):
                return str(body["message"])
        return response.reason_phrase

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map a non-2xx response onto the error taxonomy.

        Raises:
            AuthError, RateLimitError, BadRequestError or ModelServiceError.
        """
        status_code = response.status_code
        message = self._extract_error_message(response)

        logger.warning(
            "Model service returned error",
            status_code=status_code,
            message=message,
        )

        match status_code:
            case 401:
                raise AuthError(message or "Invalid OpenRouter API key.")
            case 429:
                raise RateLimitError(
                    message or "Too many requests. Please try again later.",
                    retry_after=_parse_retry_after(response.headers.get("retry-after")),
                )
            case 400:
                raise BadRequestError(message or "The request payload is invalid.")
            case 500 | 502 | 503 | 504:
                raise ModelServiceError(
                    message or "The model service is currently unavailable.",
                    status_code=status_code,
                )
            case _:
                msg = f"Unexpected error: {message} (status: {status_code})"
                raise ModelServiceError(msg, status_code=status_code)

    def _parse_response(
        self,
        response: httpx.Response,
        request: ChatCompletionRequest,
    ) -> ChatCompletionResponse:
        """Validate a 2xx body and, for structured requests, its JSON content.

        Raises:
            ParsingError: If the envelope or structured content is malformed.
        """
        try:
            completion = ChatCompletionResponse.model_validate(
                orjson.loads(response.content)
            )
        except orjson.JSONDecodeError as e:
            msg = "Model service returned a non-JSON body"
            raise ParsingError(msg, raw_excerpt=response.text[:RAW_EXCERPT_CHARS]) from e
        except ValidationError as e:
            msg = "Model response is missing choices[0].message"
            raise ParsingError(msg, raw_excerpt=response.text[:RAW_EXCERPT_CHARS]) from e

        if completion.usage is not None:
            logger.debug(
                "Chat completion received",
                model=completion.model,
                prompt_tokens=completion.usage.prompt_tokens,
                completion_tokens=completion.usage.completion_tokens,
            )

        if request.is_structured:
            content = completion.content
            if not content.strip():
                msg = "Model response is empty."
                raise ParsingError(msg)
            try:
                orjson.loads(content)
            except orjson.JSONDecodeError as e:
                logger.warning(
                    "Structured model output is not valid JSON",
                    model=request.model,
                    raw_response=content[:RAW_EXCERPT_CHARS],
                )
                msg = "Model response is malformed and cannot be parsed as JSON."
                raise ParsingError(msg, raw_excerpt=content[:RAW_EXCERPT_CHARS]) from e

        return completion
