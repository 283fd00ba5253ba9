"""JSON wire format."""
from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from schemakit.config import get_settings
from schemakit.errors import InvalidJSONError
from schemakit.validation.schema import Payload, Schema

from .base import data_to_payload, payload_to_data


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def from_json(text: str | bytes, schema: Schema) -> Payload:
    """Decode JSON text and build a payload of ``schema`` from it."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise InvalidJSONError(f"Could not parse JSON: {e}") from e
    return data_to_payload(data, schema)


def to_json(payload: Payload) -> str | None:
    """JSON text for a valid payload, None for an invalid one."""
    data = payload_to_data(payload)
    if data is None:
        return None
    return json.dumps(data, default=_default, indent=get_settings().JSON_INDENT)
