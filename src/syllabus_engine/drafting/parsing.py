"""
Strict reply parsing.

A reply is accepted only if it is one JSON object that validates against
the task's schema. A surrounding markdown code fence is tolerated, nothing
else is: no trailing prose, no partial objects, no repair heuristics.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from syllabus_engine.core.errors import ExternalServiceError, SerializationError

logger = logging.getLogger(__name__)

ReplyT = TypeVar("ReplyT", bound=BaseModel)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def strip_code_fence(raw: str) -> str:
    """Remove a single ```/```json fence wrapping the whole reply."""
    text = raw.strip()
    match = _FENCE_RE.match(text)
    return match.group(1).strip() if match else text


def parse_reply(
    raw: str,
    schema: type[ReplyT],
    failure: type[ExternalServiceError] = ExternalServiceError,
) -> ReplyT:
    """
    Parse raw reply text into a validated schema instance.

    Args:
        raw: Reply text from the drafting client
        schema: Pydantic model the object must satisfy
        failure: Error raised when the object is missing required fields

    Raises:
        SerializationError: Text is not a single JSON object
        failure: Object does not satisfy the schema
    """
    if raw is None:
        raise SerializationError("Empty reply from drafting service")

    try:
        payload = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        logger.debug(f"Unparseable reply ({len(raw)} chars): {raw[:200]!r}")
        raise SerializationError(f"Reply is not valid JSON: {e.msg}") from e

    if not isinstance(payload, dict):
        raise SerializationError(f"Reply must be a JSON object, got {type(payload).__name__}")

    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise failure(f"{schema.__name__} reply failed validation: {fields}") from e
