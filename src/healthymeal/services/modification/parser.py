"""Parsing of the model's free-form answer into a modification payload.

Models frequently wrap the requested JSON object in prose or code fences,
and occasionally emit more than one object. The parser takes the first
complete JSON object in the text and validates its shape.
"""

from __future__ import annotations

import json
from typing import Any

from healthymeal.llm.exceptions import ParsingError
from healthymeal.schemas.modification import ParsedModification

from .constants import DEFAULT_EXCERPT_CHARS


_DECODER = json.JSONDecoder()

_TEXT_FIELDS = ("title", "ingredients", "instructions")


def _excerpt(raw: str, limit: int) -> str:
    return raw[:limit]


def extract_json_object(raw: str) -> dict[str, Any] | None:
    """Return the first complete JSON object found in ``raw``.

    Every ``{`` is tried as a start position in order; the first one that
    decodes to an object wins. Text without any ``{`` is decoded as-is.
    Returns None when nothing in the text decodes to an object.
    """
    text = raw.strip()
    start = text.find("{")

    if start == -1:
        try:
            value = json.loads(text)
        except json.JSONDecodeError:
            return None
        return value if isinstance(value, dict) else None

    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(value, dict):
                return value
        start = text.find("{", start + 1)

    return None


def parse_modification_response(
    raw: str, *, excerpt_chars: int = DEFAULT_EXCERPT_CHARS
) -> ParsedModification:
    """Parse raw model output into a ``ParsedModification``.

    Args:
        raw: Message content returned by the model.
        excerpt_chars: How much of ``raw`` to keep on the raised error.

    Returns:
        The validated payload.

    Raises:
        ParsingError: If no JSON object is found, or a required field is
            missing or has the wrong type.
    """
    if not raw or not raw.strip():
        msg = "Response is empty"
        raise ParsingError(msg, raw_excerpt="")

    data = extract_json_object(raw)
    if data is None:
        msg = "No JSON object found in response"
        raise ParsingError(msg, raw_excerpt=_excerpt(raw, excerpt_chars))

    for field in _TEXT_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            msg = f"Missing or invalid '{field}' field"
            raise ParsingError(msg, raw_excerpt=_excerpt(raw, excerpt_chars))

    changes = data.get("changes_summary")
    if not isinstance(changes, list):
        msg = "Missing or invalid 'changes_summary' field"
        raise ParsingError(msg, raw_excerpt=_excerpt(raw, excerpt_chars))

    return ParsedModification(
        title=data["title"],
        ingredients=data["ingredients"],
        instructions=data["instructions"],
        changes_summary=changes,
    )


class ResponseParser:
    """Callable wrapper around ``parse_modification_response``.

    Holds the excerpt length so the service can be configured once.
    """

    def __init__(self, excerpt_chars: int = DEFAULT_EXCERPT_CHARS) -> None:
        self.excerpt_chars = excerpt_chars

    def parse(self, raw: str) -> ParsedModification:
        """Parse raw model output. See ``parse_modification_response``."""
        return parse_modification_response(raw, excerpt_chars=self.excerpt_chars)
