from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from chatoyant import logger as logger_mod

from .declaration import instantiate, iter_fields
from .errors import SchemaError
from .field import FieldDescriptor, FieldKind
from .validator import collect_issues
from .view import unwrap

log = logger_mod.get_logger()


def _build_nested(schema_cls: type, data: Mapping) -> Any:
    nested = instantiate(schema_cls)
    populate(nested, data)
    return nested


def _fill_array(field: FieldDescriptor, value: Any) -> None:
    items = field.items
    if items is not None and items.kind is FieldKind.OBJECT and items.schema is not None:
        field.value = [
            None if item is None else _build_nested(items.schema, item) for item in value
        ]
    else:
        field.value = list(value)


def _fill_object(field: FieldDescriptor, value: Any) -> None:
    if field.schema is not None and isinstance(value, Mapping):
        field.value = _build_nested(field.schema, value)


def _assign(field: FieldDescriptor, value: Any) -> None:
    field.value = value


_FILLERS: dict[FieldKind, Callable[[FieldDescriptor, Any], None]] = {
    FieldKind.ARRAY: _fill_array,
    FieldKind.OBJECT: _fill_object,
    FieldKind.BOOLEAN: _assign,
    FieldKind.INTEGER: _assign,
    FieldKind.NUMBER: _assign,
    FieldKind.STRING: _assign,
    FieldKind.ENUM: _assign,
    FieldKind.LITERAL: _assign,
    FieldKind.NULL: _assign,
}


def populate(raw: Any, data: Mapping) -> None:
    """Copy already-validated ``data`` into the descriptors of ``raw``.

    Absent keys keep their current value. ``None`` only lands on ``null``
    fields; other kinds skip it. Nested objects and arrays are copied, never
    aliased to the caller's containers.
    """

    for name, field in iter_fields(raw):
        if name not in data:
            continue
        value = data[name]
        if value is None:
            if field.kind is FieldKind.NULL:
                field.value = None
            continue
        _FILLERS[field.kind](field, value)


def parse(instance: Any, data: Any) -> None:
    """Validate ``data`` in full, then apply it to ``instance`` in place.

    Raises :class:`SchemaError` with every violation before anything is
    written, so a failed parse leaves the instance untouched.
    """

    raw = unwrap(instance)
    issues = collect_issues(raw, data)
    if issues:
        log.debug(f"Schema parse rejected for {type(raw).__name__}: {len(issues)} issue(s)")
        raise SchemaError(issues)
    populate(raw, data)
