"""LLM response decoding.

Text responses are returned verbatim. JSON responses are unfenced, parsed
and checked against a :class:`~models.schemas.ResponseSchema`: malformed
JSON is always an error, while list-typed values of the wrong shape are
replaced with an empty list so a near-miss from the model stays usable.
"""

import json
import logging
import re
from typing import Any, Optional

from config.exceptions import LLMResponseParseError
from models.enums import FieldType
from models.schemas import ResponseSchema

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json|```")


def decode_text(text: Optional[str]) -> str:
    """Return the response text verbatim (None becomes an empty string)."""
    return text or ""


def parse_json_response(text: Optional[str]) -> Any:
    """Strip Markdown code fences and parse the remainder as JSON.

    Raises:
        LLMResponseParseError: If the text is not valid JSON.
    """
    raw = text or ""
    cleaned = _FENCE_RE.sub("", raw).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse JSON from LLM response: %s", raw[:200])
        raise LLMResponseParseError(raw_response=raw) from e


def coerce_string_list(value: Any) -> list[str]:
    """Return value as a list of strings, or [] when it is not a list."""
    if not isinstance(value, list):
        logger.warning("Expected a JSON array, got %s; using an empty list", type(value).__name__)
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def decode_response(text: Optional[str], schema: Optional[ResponseSchema] = None) -> Any:
    """Decode an upstream response according to its schema.

    Args:
        text: Raw response text.
        schema: Expected shape. ``None`` selects text mode.

    Returns:
        The text, a list of strings, or a dict keyed by the schema's fields.

    Raises:
        LLMResponseParseError: On malformed JSON, a non-object where an
            object is required, or a missing string field.
    """
    if schema is None:
        return decode_text(text)

    data = parse_json_response(text)
    if schema.is_array:
        return coerce_string_list(data)

    if not isinstance(data, dict):
        raise LLMResponseParseError(
            "The AI response was not a JSON object as expected.", raw_response=text or ""
        )

    result = {}
    for f in schema.fields:
        value = data.get(f.name)
        if f.type == FieldType.STRING_ARRAY:
            result[f.name] = coerce_string_list(value)
        elif isinstance(value, str):
            result[f.name] = value
        else:
            raise LLMResponseParseError(
                f"The AI response is missing the text field '{f.name}'.",
                raw_response=text or "",
            )
    return result
