from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from . import descriptors, emitter, instances, populator, validator
from .declaration import Declaration
from .field import FieldDescriptor


class Schema(Declaration):
    """Base class for schema declarations and home of the schema toolkit.

    Example:
        >>> class Person(Schema):
        ...     name = Schema.String(min_length=1)
        ...     age = Schema.Integer(minimum=0)
        >>> person = Schema.create(Person)
        >>> Schema.parse(person, {"name": "Ada", "age": 30})
        >>> person.name
        'Ada'
    """

    String = staticmethod(descriptors.String)
    Number = staticmethod(descriptors.Number)
    Integer = staticmethod(descriptors.Integer)
    Boolean = staticmethod(descriptors.Boolean)
    Null = staticmethod(descriptors.Null)
    Array = staticmethod(descriptors.Array)
    Object = staticmethod(descriptors.Object)
    Enum = staticmethod(descriptors.Enum)
    Literal = staticmethod(descriptors.Literal)

    create = staticmethod(instances.create)
    clone = staticmethod(instances.clone)
    to_object = staticmethod(instances.to_object)
    parse = staticmethod(populator.parse)
    validate = staticmethod(validator.validate)
    validate_or_throw = staticmethod(validator.validate_or_throw)
    to_json = staticmethod(emitter.to_json)
    stringify = staticmethod(emitter.stringify)


FieldSpec = Union[Mapping[str, FieldDescriptor], Iterable[tuple[str, FieldDescriptor]]]


def define_schema(name: str, fields: FieldSpec, *, doc: str | None = None) -> type:
    """Build a ``Schema`` subclass from ``(name, descriptor)`` pairs.

    Registration order is the declared order used for validation and for
    the emitted ``properties``.
    """

    pairs = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
    namespace: dict[str, Any] = {}
    for field_name, descriptor in pairs:
        if not isinstance(descriptor, FieldDescriptor):
            raise TypeError(f"{field_name!r} is not a field descriptor")
        if field_name in namespace:
            raise ValueError(f"duplicate field {field_name!r}")
        namespace[field_name] = descriptor
    if doc is not None:
        namespace["__doc__"] = doc
    return type(name, (Schema,), namespace)
