"""Conversion between plain data and payloads.

Incoming keys are normalized to snake_case before strict construction, so a
client may send ``pageSize`` for a ``page_size`` attribute. Outgoing data is
produced only for valid payloads; an invalid payload serializes to None.
"""
from __future__ import annotations

import warnings
from collections.abc import Mapping
from typing import Any

from schemakit.config import get_settings
from schemakit.logging import serializer_logger
from schemakit.validation.schema import Payload, Schema

from .casing import underscore


def convert_data(value: Any, *, normalize_keys: bool | None = None) -> Any:
    """Recursively rewrite mapping keys to snake_case; lists are walked."""
    if normalize_keys is None:
        normalize_keys = get_settings().NORMALIZE_KEYS
    if not normalize_keys:
        return value
    if isinstance(value, Mapping):
        return {underscore(str(k)): convert_data(v, normalize_keys=True) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [convert_data(v, normalize_keys=True) for v in value]
    return value


def data_to_payload(data: Any, schema: Schema) -> Payload:
    """Strictly build a payload from plain data. Unknown keys raise NoAttributeError."""
    return schema.new(convert_data(data))


def payload_to_data(payload: Payload) -> Any:
    """Plain data for a valid payload, None otherwise."""
    if not payload.is_valid():
        serializer_logger().debug("payload_not_serialized", schema=payload.schema.name, errors=payload.errors)
        return None
    return payload.to_data()


def hash_to_payload(data: Any, schema: Schema) -> Payload:
    """Deprecated alias of :func:`data_to_payload`."""
    warnings.warn("hash_to_payload is deprecated, use data_to_payload instead", DeprecationWarning, stacklevel=2)
    return data_to_payload(data, schema)


def payload_to_hash(payload: Payload) -> Any:
    """Deprecated alias of :func:`payload_to_data`."""
    warnings.warn("payload_to_hash is deprecated, use payload_to_data instead", DeprecationWarning, stacklevel=2)
    return payload_to_data(payload)
