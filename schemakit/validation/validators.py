"""Validation algorithm.

Pure function from (schema, payload) to an ordered list of messages.
Per-field checks stop at the first failure for that field; every field
and every cross-validator is always evaluated so a single call reports
every problem at once.

Per-field precedence:
    1. required and UNSET         -> "<field> is required"
    2. UNSET or None              -> valid, nothing else checked
    3. declared bool              -> exactly True or False
    4. declared schema            -> payload of that schema, itself valid
    5. declared primitive         -> isinstance (bool never counts as a number)
    6. per-field predicate        -> "<field> is not valid"
"""
from __future__ import annotations

import numbers
from typing import Any

from schemakit.errors import ValidationError
from schemakit.logging import schema_logger

from .attribute import UNSET, Attribute, is_schema_type, type_name
from .schema import Payload, Schema


def validate_attribute(attr: Attribute, value: Any) -> list[str]:
    """Messages for one field value; empty when valid."""
    name = attr.name
    if value is UNSET:
        return [f"{name} is required"] if attr.required else []
    if value is None:
        return []

    declared = attr.type
    if declared is bool:
        if value is not True and value is not False:
            return [f"{name}: {value} is not Boolean"]
    elif is_schema_type(declared):
        if not isinstance(value, Payload) or not value.is_a(declared):
            return [f"{name}: {value} is not {type_name(declared)}"]
        if not value.is_valid():
            return [f"{name}: {message}" for message in value.errors]
    elif not matches_type(value, declared):
        return [f"{name}: {value} is not {type_name(declared)}"]

    if attr.predicate is not None:
        try:
            if not attr.predicate(value):
                return [f"{name} is not valid"]
        except Exception as e:
            return [str(e) or f"{name} is not valid"]
    return []


def matches_type(value: Any, declared: Any) -> bool:
    """Runtime type check for primitive declarations.

    Subclasses of a primitive are accepted, except that a bool is never
    taken for an int, float or other number.
    """
    if isinstance(value, bool) and declared is not bool and _is_numeric_type(declared):
        return False
    try:
        return isinstance(value, declared)
    except TypeError:
        return False


def _is_numeric_type(declared: Any) -> bool:
    return isinstance(declared, type) and issubclass(declared, numbers.Number)


def run_validators(schema: Schema, payload: Payload) -> list[str]:
    """Evaluate every cross-field validator in declaration order."""
    errors: list[str] = []
    for label, predicate in schema.validators:
        try:
            result = predicate(payload)
        except ValidationError as e:
            errors.extend(e.messages or [e.message])
        except Exception as e:
            schema_logger().debug("validator_raised", schema=schema.name, validator=label, error=str(e))
            errors.append(str(e) or label)
        else:
            if not result:
                errors.append(label)
    return errors


def validate_payload(schema: Schema, payload: Payload) -> list[str]:
    """Run the full validation algorithm over a payload's current values."""
    errors: list[str] = []
    for name, attr in schema.attributes.items():
        errors.extend(validate_attribute(attr, payload.raw(name)))
    errors.extend(run_validators(schema, payload))
    return errors
