"""Union schemas.

``any_of(A, B, ...)`` builds a schema whose payload is *one of* the allowed
schemas and proxies field access to it. The intended schema must be clear
when the payload is built: candidates are tried in declaration order and
the first one that both constructs and validates wins.

Unlike collections, unions only accept schemas, never primitive types.

Usage:
    Pet = any_of(Dog, Cat)
    pet = Pet.new({"name": "Rex", "barks": True})
    pet.is_a(Dog)        # True
    pet.get("name")      # "Rex"
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from schemakit.errors import NoAttributeError
from schemakit.logging import schema_logger
from schemakit.validation.schema import Payload, Schema


class UnionSchema(Schema):
    """Logical OR over a fixed, ordered set of schemas."""

    def __init__(self, name: str | None = None, *, allowed_schemas: tuple[Schema, ...] = (), parent: UnionSchema | None = None):
        if parent is not None and not allowed_schemas:
            allowed_schemas = parent.allowed_schemas
        if not allowed_schemas:
            raise ValueError("any_of requires at least one schema")
        for schema in allowed_schemas:
            if not isinstance(schema, Schema):
                raise TypeError(f"any_of only accepts schemas, got {schema!r}")
        self.allowed_schemas = tuple(allowed_schemas)
        super().__init__(name or "AnyOf" + "Or".join(s.name for s in self.allowed_schemas), parent=parent)
        if parent is None:
            self.validate("Payload does not match any allowed schema", _payload_matches)

    def extend(self, name: str) -> UnionSchema:
        return type(self)(name, allowed_schemas=self.allowed_schemas, parent=self)

    def new(self, source: Any = None) -> UnionPayload:
        """Hold an allowed payload directly, or match a mapping against the candidates."""
        payload = self.payload_class(self)
        if isinstance(source, Payload):
            if isinstance(source, UnionPayload) or self.allows(source):
                payload._hold(source)
        elif isinstance(source, Mapping):
            payload._hold(self._match(source))
        return payload

    __call__ = new

    def import_from(self, source: Any) -> UnionPayload:
        """Import into the first candidate that validates, then normalize via ``new``."""
        for schema in self.allowed_schemas:
            candidate = schema.import_from(source)
            if candidate.is_valid():
                return self.new(candidate.to_data())
        return self.payload_class(self)

    def coerce(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self.new(value)
        return value

    def allows(self, payload: Payload) -> bool:
        return any(payload.is_a(schema) for schema in self.allowed_schemas)

    def _match(self, data: Mapping[str, Any]) -> Payload | None:
        log = schema_logger()
        for schema in self.allowed_schemas:
            try:
                candidate = schema.new(data)
            except (NoAttributeError, TypeError) as e:
                log.debug("union_candidate_rejected", union=self.name, candidate=schema.name, error=str(e))
                continue
            if candidate.is_valid():
                return candidate
            log.debug("union_candidate_invalid", union=self.name, candidate=schema.name, errors=candidate.errors)
        return None


def _payload_matches(payload: UnionPayload) -> bool:
    inner = payload.payload
    return inner is not None and inner.is_valid()


class UnionPayload(Payload):
    """Proxy to the matched payload of one of the allowed schemas."""

    __slots__ = ("_payload",)

    schema: UnionSchema

    def __init__(self, schema: UnionSchema):
        super().__init__(schema)
        self._payload: Payload | None = None

    def _hold(self, inner: Payload | None) -> None:
        self._release(self._payload)
        self._payload = self._adopt(inner)
        self.invalidate()

    @property
    def payload(self) -> Payload | None:
        """The matched payload, or None when nothing matched."""
        return self._payload

    def _inner(self, name: str) -> Payload:
        if self._payload is None:
            raise NoAttributeError(name, self.schema.name)
        return self._payload

    def get(self, name: str) -> Any:
        return self._inner(name).get(name)

    def set(self, name: str, value: Any) -> None:
        self._inner(name).set(name, value)

    def raw(self, name: str) -> Any:
        return self._inner(name).raw(name)

    def __contains__(self, name: object) -> bool:
        return self._payload is not None and name in self._payload

    def is_a(self, schema: Any) -> bool:
        return schema is self.schema or (self._payload is not None and self._payload.is_a(schema))

    def field_values(self) -> dict[str, Any]:
        return self._payload.field_values() if self._payload is not None else {}

    def to_data(self) -> Any:
        return self._payload.to_data() if self._payload is not None else None

    to_dict = to_data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UnionPayload):
            return other.schema is self.schema and other._payload == self._payload
        if isinstance(other, Payload):
            return self._payload == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __deepcopy__(self, memo: dict) -> UnionPayload:
        clone = type(self)(self.schema)
        if self._payload is not None:
            clone._hold(copy.deepcopy(self._payload, memo))
        return clone

    def __repr__(self) -> str:
        return f"{self.schema.name}({self._payload!r})"


UnionSchema.payload_class = UnionPayload


def any_of(*schemas: Schema) -> UnionSchema:
    """Schema for a payload matching any one of ``schemas``."""
    return UnionSchema(allowed_schemas=schemas)
