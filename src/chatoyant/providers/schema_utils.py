"""OpenAI strict structured-output schema rewriting.

Strict mode requires every object to list all of its properties as required
and to forbid extra keys. Optional properties are expressed as nullable
instead.
"""

from __future__ import annotations

from typing import Any


def make_openai_strict(schema: dict[str, Any]) -> dict[str, Any]:
    """Strict-mode copy of ``schema``; the input is never mutated."""

    result = dict(schema)

    if result.get("type") == "object":
        result["additionalProperties"] = False
        props = result.get("properties")
        if props:
            required = set(result.get("required") or ())
            strict_props = {}
            for key, value in props.items():
                transformed = make_openai_strict(value)
                if key in required:
                    strict_props[key] = transformed
                else:
                    strict_props[key] = {"anyOf": [transformed, {"type": "null"}]}
            result["properties"] = strict_props
            result["required"] = list(props)

    items = result.get("items")
    if result.get("type") == "array" and isinstance(items, dict):
        result["items"] = make_openai_strict(items)

    return result


def needs_openai_strict_transform(schema: dict[str, Any]) -> bool:
    if schema.get("type") == "object":
        if schema.get("additionalProperties") is not False:
            return True
        props = schema.get("properties") or {}
        if set(props) != set(schema.get("required") or ()):
            return True
        if any(needs_openai_strict_transform(v) for v in props.values()):
            return True

    items = schema.get("items")
    if schema.get("type") == "array" and isinstance(items, dict):
        return needs_openai_strict_transform(items)

    return False


def strip_strict_nulls(data: Any, schema: dict[str, Any]) -> Any:
    """Undo the nullable wrapping on a strict-mode answer.

    ``null`` values for properties the original ``schema`` did not require
    are dropped, so absent optional fields look absent again.
    """

    if schema.get("type") == "object" and isinstance(data, dict):
        props = schema.get("properties") or {}
        required = set(schema.get("required") or ())
        out = {}
        for key, value in data.items():
            if value is None and key in props and key not in required:
                continue
            sub = props.get(key)
            out[key] = strip_strict_nulls(value, sub) if isinstance(sub, dict) else value
        return out

    items = schema.get("items")
    if schema.get("type") == "array" and isinstance(items, dict) and isinstance(data, list):
        return [strip_strict_nulls(v, items) for v in data]

    return data
