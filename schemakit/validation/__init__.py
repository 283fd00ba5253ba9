"""Schema Definition and Validation

Schemas are the single source of truth for a record's shape: declared
fields, per-field predicates and cross-field validators. Payloads are the
mutable instances that validate lazily and report every problem at once.

Key Features:
- Attribute descriptors with required/default/alias/predicate
- Schema inheritance via extend()
- Strict construction (new) and graceful construction (import_from)
- Memoized validation invalidated on mutation
- Explicit opt-in coercion of wire strings

Usage:
    from schemakit.validation import Schema

    Person = Schema("Person").attribute("name", str, required=True).attribute("age", int)

    payload = Person.new({"name": 1})
    payload.is_valid()   # False
    payload.errors       # ["name: 1 is not String"]
"""

# Core schema system
from .attribute import UNSET, Attribute, type_name, is_schema_type
from .schema import Schema, Payload, to_plain

# Validation algorithm
from .validators import validate_payload, validate_attribute, matches_type, run_validators

# Coercion
from .coercion import (
    CoercionError,
    CoercionRule,
    ExplicitCoercion,
    StringToInt,
    StringToFloat,
    StringToDecimal,
    StringToBool,
    ISO8601ToDateTime,
    ISO8601ToDate,
    DEFAULT_COERCER,
    coerce,
    coerce_or_none,
)

__all__ = [
    "UNSET",
    "Attribute",
    "type_name",
    "is_schema_type",
    "Schema",
    "Payload",
    "to_plain",
    "validate_payload",
    "validate_attribute",
    "matches_type",
    "run_validators",
    "CoercionError",
    "CoercionRule",
    "ExplicitCoercion",
    "StringToInt",
    "StringToFloat",
    "StringToDecimal",
    "StringToBool",
    "ISO8601ToDateTime",
    "ISO8601ToDate",
    "DEFAULT_COERCER",
    "coerce",
    "coerce_or_none",
]
