from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class FieldKind(str, Enum):
    """Closed set of field kinds a schema can declare."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    LITERAL = "literal"
    ENUM = "enum"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(eq=False)
class FieldDescriptor:
    """One declared field: its kind, current value, default and constraints.

    ``options`` is keyed by JSON Schema keyword names (``minLength``,
    ``exclusiveMinimum``, ...) plus ``optional``; absent options are simply not
    present. Constraints are stored here and enforced only by the validator.
    """

    kind: FieldKind
    value: Any
    default_value: Any
    options: dict[str, Any] = field(default_factory=dict)
    items: Optional["FieldDescriptor"] = None
    schema: Optional[type] = None
    enum_values: Optional[tuple] = None
    literal_value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "_kind_locked", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "kind" and getattr(self, "_kind_locked", False):
            raise AttributeError("FieldDescriptor.kind is immutable")
        if name == "value" and getattr(self, "kind", None) is FieldKind.NULL:
            value = None
        object.__setattr__(self, name, value)

    @property
    def type(self) -> str:
        return self.kind.value

    @property
    def optional(self) -> bool:
        return bool(self.options.get("optional"))

    @property
    def description(self) -> Optional[str]:
        return self.options.get("description")

    @property
    def has_default(self) -> bool:
        return self.options.get("default") is not None

    def fresh(self) -> "FieldDescriptor":
        """Copy this descriptor with its value reset to a new default.

        Nested schema defaults are rebuilt and lists copied, so the returned
        descriptor shares no mutable state with ``self``.
        """
        return FieldDescriptor(
            kind=self.kind,
            value=self._fresh_default(),
            default_value=self.default_value,
            options=dict(self.options),
            items=self.items,
            schema=self.schema,
            enum_values=self.enum_values,
            literal_value=self.literal_value,
        )

    def _fresh_default(self) -> Any:
        if self.kind is FieldKind.OBJECT and self.schema is not None:
            from .declaration import instantiate

            return instantiate(self.schema)
        return copy.deepcopy(self.default_value)


def is_field_descriptor(value: Any) -> bool:
    return isinstance(value, FieldDescriptor)


def create_field_descriptor(
    kind: FieldKind,
    default_value: Any,
    options: dict[str, Any],
    **extra: Any,
) -> FieldDescriptor:
    """Build a descriptor, dropping options that were not supplied."""

    return FieldDescriptor(
        kind=kind,
        value=default_value,
        default_value=default_value,
        options={k: v for k, v in options.items() if v is not None},
        **extra,
    )
