from __future__ import annotations

from typing import Any

from .declaration import has_fields, iter_fields
from .field import FieldDescriptor, FieldKind

_RAW = "_SchemaView__raw"


class SchemaView:
    """Attribute-level view over a raw schema instance.

    Reading a declared field returns the descriptor's ``value``; writing one
    replaces it without validation (only ``parse`` enforces constraints).
    Nested schema instances come back wrapped so deep writes work the same
    way. Anything that is not a declared field is forwarded to the raw
    instance untouched.
    """

    __slots__ = ("__raw",)

    def __init__(self, raw: Any) -> None:
        object.__setattr__(self, _RAW, raw)

    def _descriptor(self, name: str) -> FieldDescriptor | None:
        raw = object.__getattribute__(self, _RAW)
        value = vars(raw).get(name)
        return value if isinstance(value, FieldDescriptor) else None

    def __getattr__(self, name: str) -> Any:
        field = self._descriptor(name)
        if field is None:
            return getattr(object.__getattribute__(self, _RAW), name)
        value = field.value
        if field.kind is FieldKind.OBJECT and has_fields(value):
            return SchemaView(value)
        if field.kind is FieldKind.ARRAY and isinstance(value, list):
            if any(has_fields(item) for item in value):
                return [SchemaView(item) if has_fields(item) else item for item in value]
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        field = self._descriptor(name)
        if field is None:
            setattr(object.__getattribute__(self, _RAW), name, value)
            return
        field.value = _to_raw(value)

    def __delattr__(self, name: str) -> None:
        if self._descriptor(name) is not None:
            raise AttributeError(f"cannot delete declared field {name!r}")
        delattr(object.__getattribute__(self, _RAW), name)

    def __dir__(self) -> list[str]:
        return [name for name, _ in iter_fields(object.__getattribute__(self, _RAW))]

    def __iter__(self):
        return iter(self.__dir__())

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SchemaView):
            return unwrap(self) is unwrap(other)
        return NotImplemented

    def __hash__(self) -> int:
        return id(unwrap(self))

    def __repr__(self) -> str:
        return f"SchemaView({object.__getattribute__(self, _RAW)!r})"


def _to_raw(value: Any) -> Any:
    if isinstance(value, SchemaView):
        return unwrap(value)
    if isinstance(value, list) and any(isinstance(v, SchemaView) for v in value):
        return [unwrap(v) if isinstance(v, SchemaView) else v for v in value]
    return value


def wrap(instance: Any) -> SchemaView:
    if isinstance(instance, SchemaView):
        return instance
    return SchemaView(instance)


def unwrap(value: Any) -> Any:
    """Return the raw instance behind a view (or ``value`` itself)."""

    if isinstance(value, SchemaView):
        return object.__getattribute__(value, _RAW)
    return value


def is_proxied(value: Any) -> bool:
    return isinstance(value, SchemaView)
