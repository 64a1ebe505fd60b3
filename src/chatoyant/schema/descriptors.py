"""Descriptor factories, one per field kind.

Factories only record constraints; nothing is enforced until ``validate`` or
``parse`` runs. Default resolution: explicit ``default`` first, then the
kind's zero value.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .declaration import instantiate
from .field import FieldDescriptor, FieldKind, create_field_descriptor


def _numeric_options(
    *,
    default: Optional[float],
    minimum: Optional[float],
    maximum: Optional[float],
    exclusive_minimum: Optional[float],
    exclusive_maximum: Optional[float],
    multiple_of: Optional[float],
    optional: Optional[bool],
    description: Optional[str],
) -> dict[str, Any]:
    return {
        "description": description,
        "optional": optional,
        "default": default,
        "minimum": minimum,
        "maximum": maximum,
        "exclusiveMinimum": exclusive_minimum,
        "exclusiveMaximum": exclusive_maximum,
        "multipleOf": multiple_of,
    }


def Boolean(  # noqa: N802
    *,
    default: Optional[bool] = None,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    return create_field_descriptor(
        FieldKind.BOOLEAN,
        default if default is not None else False,
        {"description": description, "optional": optional, "default": default},
    )


def Integer(  # noqa: N802
    *,
    default: Optional[int] = None,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    exclusive_minimum: Optional[float] = None,
    exclusive_maximum: Optional[float] = None,
    multiple_of: Optional[float] = None,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    return create_field_descriptor(
        FieldKind.INTEGER,
        default if default is not None else 0,
        _numeric_options(
            default=default,
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=exclusive_minimum,
            exclusive_maximum=exclusive_maximum,
            multiple_of=multiple_of,
            optional=optional,
            description=description,
        ),
    )


def Number(  # noqa: N802
    *,
    default: Optional[float] = None,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    exclusive_minimum: Optional[float] = None,
    exclusive_maximum: Optional[float] = None,
    multiple_of: Optional[float] = None,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    return create_field_descriptor(
        FieldKind.NUMBER,
        default if default is not None else 0,
        _numeric_options(
            default=default,
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=exclusive_minimum,
            exclusive_maximum=exclusive_maximum,
            multiple_of=multiple_of,
            optional=optional,
            description=description,
        ),
    )


def String(  # noqa: N802
    *,
    default: Optional[str] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[str] = None,
    format: Optional[str] = None,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    return create_field_descriptor(
        FieldKind.STRING,
        default if default is not None else "",
        {
            "description": description,
            "optional": optional,
            "default": default,
            "minLength": min_length,
            "maxLength": max_length,
            "pattern": pattern,
            "format": format,
        },
    )


def Null(  # noqa: N802
    *,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    return create_field_descriptor(
        FieldKind.NULL,
        None,
        {"description": description, "optional": optional},
    )


def Enum(  # noqa: N802
    values: Iterable[Any],
    *,
    default: Any = None,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    """Field restricted to ``values``; defaults to the first value.

    ``default`` is expected to be one of ``values``; it is not checked.
    """

    members = tuple(values)
    if not members:
        raise ValueError("Enum requires at least one value")
    return create_field_descriptor(
        FieldKind.ENUM,
        default if default is not None else members[0],
        {"description": description, "optional": optional, "default": default},
        enum_values=members,
    )


def Literal(  # noqa: N802
    value: Any,
    *,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    return create_field_descriptor(
        FieldKind.LITERAL,
        value,
        {"description": description, "optional": optional},
        literal_value=value,
    )


def Array(  # noqa: N802
    items: FieldDescriptor,
    *,
    min_items: Optional[int] = None,
    max_items: Optional[int] = None,
    unique_items: Optional[bool] = None,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    if not isinstance(items, FieldDescriptor):
        raise TypeError("Array items must be a field descriptor, e.g. Schema.String()")
    return create_field_descriptor(
        FieldKind.ARRAY,
        [],
        {
            "description": description,
            "optional": optional,
            "minItems": min_items,
            "maxItems": max_items,
            "uniqueItems": unique_items,
        },
        items=items,
    )


def Object(  # noqa: N802
    schema: type,
    *,
    optional: Optional[bool] = None,
    description: Optional[str] = None,
) -> FieldDescriptor:
    """Nested schema field. One default instance is built eagerly."""

    return create_field_descriptor(
        FieldKind.OBJECT,
        instantiate(schema),
        {"description": description, "optional": optional},
        schema=schema,
    )
