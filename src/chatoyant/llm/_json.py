from __future__ import annotations

import json
import re
from typing import Any

from jsonschema import validate
from jsonschema.exceptions import ValidationError as _SchemaValidationError

from .errors import LLMValidationError

_FENCE = re.compile(r"^\s*```(?:json)?\s*\n(.*?)\n?```\s*$", re.S)


def parse_json(text: str) -> dict[str, Any]:
    """Parse JSON from a model response.

    Assumes the provider was instructed to return JSON only; a single
    surrounding ```json fence is tolerated.
    """

    fenced = _FENCE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        data = json.loads(text)
    except ValueError as e:
        raise LLMValidationError(f"Failed to parse JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMValidationError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def validate_json(instance: dict[str, Any], schema: dict[str, Any]) -> None:
    try:
        validate(instance=instance, schema=schema)
    except _SchemaValidationError as e:
        raise LLMValidationError(f"JSON schema validation failed: {e.message}") from e
