from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Callable

from .declaration import instantiate, iter_fields
from .errors import SchemaError, SchemaIssue, ValidationResult
from .field import FieldDescriptor, FieldKind
from .view import unwrap

Issues = list[SchemaIssue]

_MISSING = object()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equal(a: Any, b: Any) -> bool:
    """Equality without ``True == 1`` aliasing; ``1 == 1.0`` still holds."""

    if _is_number(a) and _is_number(b):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


def _is_multiple(value: float, step: float) -> bool:
    if isinstance(value, int) and isinstance(step, int):
        return value % step == 0
    # float steps like 0.1 are not exact in binary; compare the quotient with a tolerance
    quotient = value / step
    if not math.isfinite(quotient):
        return False
    return math.isclose(quotient, round(quotient), rel_tol=1e-9, abs_tol=1e-9)


def _check_numeric(field: FieldDescriptor, value: float, path: str, issues: Issues) -> None:
    opts = field.options
    if "minimum" in opts and value < opts["minimum"]:
        issues.append(SchemaIssue.constraint(path, "minimum", opts["minimum"], value))
    if "maximum" in opts and value > opts["maximum"]:
        issues.append(SchemaIssue.constraint(path, "maximum", opts["maximum"], value))
    if "exclusiveMinimum" in opts and value <= opts["exclusiveMinimum"]:
        issues.append(
            SchemaIssue.constraint(
                path, "exclusiveMinimum", opts["exclusiveMinimum"], value
            )
        )
    if "exclusiveMaximum" in opts and value >= opts["exclusiveMaximum"]:
        issues.append(
            SchemaIssue.constraint(
                path, "exclusiveMaximum", opts["exclusiveMaximum"], value
            )
        )
    if "multipleOf" in opts and opts["multipleOf"] and not _is_multiple(value, opts["multipleOf"]):
        issues.append(
            SchemaIssue.constraint(path, "multipleOf", opts["multipleOf"], value)
        )


def _check_string(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    if not isinstance(value, str):
        issues.append(SchemaIssue.type_mismatch(path, "string", value))
        return
    opts = field.options
    if "minLength" in opts and len(value) < opts["minLength"]:
        issues.append(SchemaIssue.constraint(path, "minLength", opts["minLength"], value))
    if "maxLength" in opts and len(value) > opts["maxLength"]:
        issues.append(SchemaIssue.constraint(path, "maxLength", opts["maxLength"], value))
    if "pattern" in opts and re.search(opts["pattern"], value) is None:
        issues.append(SchemaIssue.constraint(path, "pattern", opts["pattern"], value))


def _check_number(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    if not _is_number(value) or not math.isfinite(value):
        issues.append(SchemaIssue.type_mismatch(path, "number", value))
        return
    _check_numeric(field, value, path, issues)


def _check_integer(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    whole = isinstance(value, int) or (
        isinstance(value, float) and math.isfinite(value) and value.is_integer()
    )
    if not _is_number(value) or not whole:
        issues.append(SchemaIssue.type_mismatch(path, "integer", value))
        return
    _check_numeric(field, value, path, issues)


def _check_boolean(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    if not isinstance(value, bool):
        issues.append(SchemaIssue.type_mismatch(path, "boolean", value))


def _check_null(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    # None is accepted before dispatch, so anything reaching here is wrong
    issues.append(SchemaIssue.type_mismatch(path, "null", value))


def _check_enum(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    allowed = field.enum_values or ()
    if not any(strict_equal(value, member) for member in allowed):
        issues.append(SchemaIssue.invalid_enum(path, allowed, value))


def _check_literal(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    if not strict_equal(value, field.literal_value):
        issues.append(SchemaIssue.literal_mismatch(path, field.literal_value, value))


def _has_duplicates(items: list) -> bool:
    seen: list = []
    for item in items:
        if any(strict_equal(item, other) for other in seen):
            return True
        seen.append(item)
    return False


def _check_array(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    if not isinstance(value, (list, tuple)):
        issues.append(SchemaIssue.type_mismatch(path, "array", value))
        return
    opts = field.options
    if "minItems" in opts and len(value) < opts["minItems"]:
        issues.append(SchemaIssue.constraint(path, "minItems", opts["minItems"], len(value)))
    if "maxItems" in opts and len(value) > opts["maxItems"]:
        issues.append(SchemaIssue.constraint(path, "maxItems", opts["maxItems"], len(value)))
    if opts.get("uniqueItems") and _has_duplicates(list(value)):
        issues.append(SchemaIssue.constraint(path, "uniqueItems", None, value))
    if field.items is not None:
        for index, item in enumerate(value):
            _check_field(field.items, item, f"{path}[{index}]", issues)


def _check_object(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    if not isinstance(value, Mapping):
        issues.append(SchemaIssue.type_mismatch(path, "object", value))
        return
    if field.schema is not None:
        _check_instance(instantiate(field.schema), value, path, issues)


_CHECKS: dict[FieldKind, Callable[[FieldDescriptor, Any, str, Issues], None]] = {
    FieldKind.STRING: _check_string,
    FieldKind.NUMBER: _check_number,
    FieldKind.INTEGER: _check_integer,
    FieldKind.BOOLEAN: _check_boolean,
    FieldKind.NULL: _check_null,
    FieldKind.ENUM: _check_enum,
    FieldKind.LITERAL: _check_literal,
    FieldKind.ARRAY: _check_array,
    FieldKind.OBJECT: _check_object,
}


def _check_field(field: FieldDescriptor, value: Any, path: str, issues: Issues) -> None:
    if value is _MISSING:
        if not (field.optional or field.has_default):
            issues.append(SchemaIssue.missing_field(path))
        return
    if value is None:
        if field.kind is not FieldKind.NULL and not field.optional:
            issues.append(SchemaIssue.type_mismatch(path, field.type, None))
        return
    _CHECKS[field.kind](field, value, path, issues)


def _check_instance(raw: Any, data: Mapping, base_path: str, issues: Issues) -> None:
    for name, field in iter_fields(raw):
        path = f"{base_path}.{name}" if base_path else name
        _check_field(field, data.get(name, _MISSING), path, issues)


def collect_issues(instance: Any, data: Any) -> list[SchemaIssue]:
    raw = unwrap(instance)
    if not isinstance(data, Mapping):
        return [SchemaIssue.type_mismatch("", "object", data)]
    issues: Issues = []
    _check_instance(raw, data, "", issues)
    return issues


def validate(instance: Any, data: Any) -> ValidationResult:
    """Check ``data`` against the declared fields of ``instance``.

    Every violation across every field is collected; the result is truthy
    only when there are none.
    """

    issues = collect_issues(instance, data)
    return ValidationResult(valid=not issues, errors=tuple(issues))


def validate_or_throw(instance: Any, data: Any) -> None:
    issues = collect_issues(instance, data)
    if issues:
        raise SchemaError(issues)
