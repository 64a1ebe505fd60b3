"""Runtime schema declarations for structured data extraction.

Declare fields on a ``Schema`` subclass, get a view with ``create``, check
input with ``validate``/``parse`` and describe the shape as JSON Schema with
``to_json``/``stringify``.
"""

from .api import Schema, define_schema
from .declaration import fields, instantiate
from .emitter import stringify, to_json
from .errors import SchemaError, SchemaIssue, ValidationResult
from .field import FieldDescriptor, FieldKind, is_field_descriptor
from .instances import clone, create, to_object
from .populator import parse, populate
from .validator import validate, validate_or_throw
from .view import SchemaView, is_proxied, unwrap, wrap

__all__ = [
    "FieldDescriptor",
    "FieldKind",
    "Schema",
    "SchemaError",
    "SchemaIssue",
    "SchemaView",
    "ValidationResult",
    "clone",
    "create",
    "define_schema",
    "fields",
    "instantiate",
    "is_field_descriptor",
    "is_proxied",
    "parse",
    "populate",
    "stringify",
    "to_json",
    "to_object",
    "unwrap",
    "validate",
    "validate_or_throw",
    "wrap",
]
