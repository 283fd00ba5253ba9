"""schemakit: runtime schema definition and validation.

Usage:
    from schemakit import Schema, array_of, any_of

    Person = Schema("Person").attribute("name", str, required=True).attribute("age", int)
    People = array_of(Person)

    people = People.new([{"name": "Al"}, {"name": 1}])
    people.errors   # ["Element[1] must be Person"]
"""
from .errors import (
    InvalidPayloadError,
    NoAttributeError,
    NoPayloadError,
    SchemaKitError,
    SchemaNotDefinedError,
    ValidationError,
)
from .schemas import ANY, EMPTY, RESOURCE, any_of, array_of, resource_list_of
from .serializers import data_to_payload, from_json, payload_to_data, to_json
from .validation import UNSET, Attribute, Payload, Schema

__version__ = "0.1.0"

__all__ = [
    "Schema",
    "Payload",
    "Attribute",
    "UNSET",
    "any_of",
    "array_of",
    "ANY",
    "EMPTY",
    "RESOURCE",
    "resource_list_of",
    "data_to_payload",
    "payload_to_data",
    "from_json",
    "to_json",
    "SchemaKitError",
    "ValidationError",
    "NoAttributeError",
    "InvalidPayloadError",
    "SchemaNotDefinedError",
    "NoPayloadError",
]
