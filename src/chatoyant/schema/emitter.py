from __future__ import annotations

import json
from typing import Any, Callable

from chatoyant import config

from .declaration import instantiate, iter_fields
from .field import FieldDescriptor, FieldKind
from .view import unwrap

_NUMERIC_KEYWORDS = ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf")
_STRING_KEYWORDS = ("minLength", "maxLength", "pattern", "format")
_ARRAY_KEYWORDS = ("minItems", "maxItems", "uniqueItems")


def _copy_keywords(field: FieldDescriptor, prop: dict[str, Any], keywords: tuple) -> None:
    for keyword in keywords:
        if keyword in field.options:
            prop[keyword] = field.options[keyword]


def _emit_string(field: FieldDescriptor, prop: dict[str, Any]) -> None:
    prop["type"] = "string"
    _copy_keywords(field, prop, _STRING_KEYWORDS)


def _emit_numeric(field: FieldDescriptor, prop: dict[str, Any]) -> None:
    prop["type"] = field.type
    _copy_keywords(field, prop, _NUMERIC_KEYWORDS)


def _emit_plain(field: FieldDescriptor, prop: dict[str, Any]) -> None:
    prop["type"] = field.type


def _emit_array(field: FieldDescriptor, prop: dict[str, Any]) -> None:
    prop["type"] = "array"
    if field.items is not None:
        prop["items"] = field_to_json_schema(field.items)
    _copy_keywords(field, prop, _ARRAY_KEYWORDS)


def _emit_object(field: FieldDescriptor, prop: dict[str, Any]) -> None:
    if field.schema is None:
        return
    nested = instance_to_json_schema(instantiate(field.schema))
    prop.update(nested)


def _emit_enum(field: FieldDescriptor, prop: dict[str, Any]) -> None:
    if field.enum_values is not None:
        prop["enum"] = list(field.enum_values)


def _emit_literal(field: FieldDescriptor, prop: dict[str, Any]) -> None:
    prop["const"] = field.literal_value


_EMITTERS: dict[FieldKind, Callable[[FieldDescriptor, dict[str, Any]], None]] = {
    FieldKind.STRING: _emit_string,
    FieldKind.NUMBER: _emit_numeric,
    FieldKind.INTEGER: _emit_numeric,
    FieldKind.BOOLEAN: _emit_plain,
    FieldKind.NULL: _emit_plain,
    FieldKind.ARRAY: _emit_array,
    FieldKind.OBJECT: _emit_object,
    FieldKind.ENUM: _emit_enum,
    FieldKind.LITERAL: _emit_literal,
}


def field_to_json_schema(field: FieldDescriptor) -> dict[str, Any]:
    prop: dict[str, Any] = {}
    if field.description:
        prop["description"] = field.description
    if field.has_default:
        prop["default"] = field.options["default"]
    _EMITTERS[field.kind](field, prop)
    return prop


def instance_to_json_schema(raw: Any) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    for name, field in iter_fields(raw):
        properties[name] = field_to_json_schema(field)
        if not (field.optional or field.has_default):
            required.append(name)
    document: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        document["required"] = required
    return document


def to_json(instance: Any) -> dict[str, Any]:
    """JSON Schema (draft 2020-12) document describing ``instance``'s fields."""

    return {"$schema": config.JSON_SCHEMA_DIALECT, **instance_to_json_schema(unwrap(instance))}


def stringify(instance: Any, pretty: bool = True) -> str:
    document = to_json(instance)
    if pretty:
        return json.dumps(document, indent=2, ensure_ascii=False)
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)
