from __future__ import annotations

from typing import Any, ClassVar, Iterator

from .field import FieldDescriptor


def _collect_class_fields(cls: type) -> dict[str, FieldDescriptor]:
    table: dict[str, FieldDescriptor] = {}
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, FieldDescriptor):
                table[name] = value
    return table


def field_table(cls: type) -> dict[str, FieldDescriptor]:
    """Ordered ``name -> template descriptor`` mapping declared on ``cls``."""

    table = cls.__dict__.get("__fields__")
    if table is None:
        table = _collect_class_fields(cls)
    return dict(table)


class Declaration:
    """Base for schema declarations.

    Fields are declared as class attributes holding field descriptors. At class
    creation the descriptors are registered, in declaration order, into the
    ``__fields__`` table; every instance receives its own fresh copies.
    """

    __fields__: ClassVar[dict[str, FieldDescriptor]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__fields__ = _collect_class_fields(cls)

    def __init__(self) -> None:
        install_fields(self, type(self).__fields__)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={f.value!r}" for k, f in iter_fields(self))
        return f"{type(self).__name__}({inner})"


def install_fields(instance: Any, table: dict[str, FieldDescriptor]) -> None:
    for name, template in table.items():
        setattr(instance, name, template.fresh())


def instantiate(schema_cls: type) -> Any:
    """Build one raw instance of ``schema_cls`` with fresh descriptors.

    Works for ``Declaration`` subclasses as well as plain classes whose class
    attributes (or ``__init__``-assigned attributes) are field descriptors.
    """

    instance = schema_cls()
    if not isinstance(instance, Declaration):
        own = {k for k, v in vars(instance).items() if isinstance(v, FieldDescriptor)}
        pending = {k: v for k, v in field_table(schema_cls).items() if k not in own}
        install_fields(instance, pending)
    return instance


def iter_fields(raw: Any) -> Iterator[tuple[str, FieldDescriptor]]:
    """Yield ``(name, descriptor)`` pairs of a raw instance in declared order."""

    for name, value in vars(raw).items():
        if isinstance(value, FieldDescriptor):
            yield name, value


def fields(raw: Any) -> dict[str, FieldDescriptor]:
    return dict(iter_fields(raw))


def has_fields(value: Any) -> bool:
    if not hasattr(value, "__dict__") or isinstance(value, type):
        return False
    return any(True for _ in iter_fields(value))
