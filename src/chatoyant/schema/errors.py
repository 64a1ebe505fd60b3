from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence


def _describe(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def received_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


@dataclass(frozen=True)
class SchemaIssue:
    """A single validation failure.

    ``kind`` is ``required``, ``type``, ``enum-mismatch``, ``literal-mismatch``
    or the name of the violated constraint keyword (``minimum``,
    ``minLength``, ``pattern``, ...).
    """

    path: str
    message: str
    kind: str
    expected: Optional[str] = None
    received: Any = None

    @classmethod
    def missing_field(cls, path: str) -> "SchemaIssue":
        return cls(path, f"Missing required field: {path}", "required", "value")

    @classmethod
    def type_mismatch(cls, path: str, expected: str, received: Any) -> "SchemaIssue":
        where = path or "<root>"
        return cls(
            path,
            f"Type mismatch at {where}: expected {expected}, got {received_type(received)}",
            "type",
            expected,
            received,
        )

    @classmethod
    def constraint(
        cls, path: str, keyword: str, limit: Any, received: Any
    ) -> "SchemaIssue":
        constraint = keyword if limit is None else f"{keyword} {limit}"
        return cls(
            path,
            f"Constraint violation at {path}: {constraint}",
            keyword,
            constraint,
            received,
        )

    @classmethod
    def invalid_enum(
        cls, path: str, allowed: Sequence[Any], received: Any
    ) -> "SchemaIssue":
        allowed_s = _describe(list(allowed))
        return cls(
            path,
            f"Invalid enum value at {path}: got {_describe(received)}, "
            f"expected one of {allowed_s}",
            "enum-mismatch",
            f"one of {allowed_s}",
            received,
        )

    @classmethod
    def literal_mismatch(cls, path: str, literal: Any, received: Any) -> "SchemaIssue":
        return cls(
            path,
            f"Constraint violation at {path}: const {_describe(literal)}",
            "literal-mismatch",
            f"const {_describe(literal)}",
            received,
        )


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: tuple[SchemaIssue, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return self.valid


class SchemaError(ValueError):
    """Raised when data does not satisfy a schema; carries every issue found."""

    def __init__(self, errors: Sequence[SchemaIssue]):
        self.errors: tuple[SchemaIssue, ...] = tuple(errors)
        if len(self.errors) == 1:
            message = self.errors[0].message
        else:
            lines = "\n".join(f"- {e.message}" for e in self.errors)
            message = f"{len(self.errors)} schema violations:\n{lines}"
        super().__init__(message)

    @property
    def path(self) -> str:
        return self.errors[0].path if self.errors else ""

    @property
    def kind(self) -> str:
        return self.errors[0].kind if self.errors else ""
