from __future__ import annotations

import copy
from typing import Any

from .declaration import has_fields, instantiate, iter_fields
from .field import FieldDescriptor, FieldKind
from .view import SchemaView, unwrap, wrap


def create(schema_cls: type) -> SchemaView:
    """Instantiate ``schema_cls`` and return it behind a view."""

    return wrap(instantiate(schema_cls))


def _clone_value(value: Any) -> Any:
    if isinstance(value, list):
        return [_clone_value(v) for v in value]
    if has_fields(value):
        return _clone_raw(value)
    return copy.deepcopy(value)


def _clone_raw(raw: Any) -> Any:
    cloned = instantiate(type(raw))
    for name, field in iter_fields(raw):
        twin = field.fresh()
        twin.value = _clone_value(field.value)
        setattr(cloned, name, twin)
    return cloned


def clone(instance: Any) -> SchemaView:
    """Deep, fully independent copy of ``instance`` (values included)."""

    return wrap(_clone_raw(unwrap(instance)))


def _plain(field: FieldDescriptor) -> Any:
    value = field.value
    if field.kind is FieldKind.ARRAY and isinstance(value, list):
        return [_extract(item) if has_fields(item) else item for item in value]
    if field.kind is FieldKind.OBJECT and has_fields(value):
        return _extract(value)
    return value


def _extract(raw: Any) -> dict[str, Any]:
    return {name: _plain(field) for name, field in iter_fields(raw)}


def to_object(instance: Any) -> dict[str, Any]:
    """Current field values as plain nested dicts and lists."""

    return _extract(unwrap(instance))
