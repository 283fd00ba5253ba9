"""Schemas (type descriptors) and payloads.

A :class:`Schema` is the reusable description of a record shape: an ordered
map of attributes plus a list of cross-field validators. It is built once,
at definition time, and treated as read-only afterwards. A :class:`Payload`
is a mutable instance holding one value per declared attribute.

Usage:
    Person = (
        Schema("Person")
        .attribute("name", str, required=True)
        .attribute("age", int)
    )

    @Person.validate("Age must not be negative")
    def _age_not_negative(payload):
        return (payload.get("age") or 0) >= 0

    payload = Person.new({"name": "Al"})
    payload.is_valid()        # True
    payload.get("age")        # None

    Employee = Person.extend("Employee").attribute("title", str)

Construction via ``new`` is strict (unknown keys raise NoAttributeError);
``import_from`` is the graceful path for loosely-shaped sources.
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable, Iterator

from schemakit.errors import NoAttributeError

from .attribute import UNSET, Attribute

Predicate = Callable[[Any], Any]


class Schema:
    """Type descriptor: ordered attributes plus cross-field validators."""

    payload_class: type[Payload]

    def __init__(self, name: str, *, parent: Schema | None = None):
        self.name = name
        self._attributes: dict[str, Attribute] = dict(parent._attributes) if parent else {}
        self._validators: list[tuple[str, Predicate]] = list(parent._validators) if parent else []
        self._accessors: dict[str, str] = dict(parent._accessors) if parent else {}
        self.parent = parent

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    def attribute(
        self,
        name: str,
        type_: Any,
        *,
        required: bool = False,
        default: Any = UNSET,
        alias: str | None = None,
        coerce: bool = False,
        predicate: Callable[[Any], bool] | None = None,
    ) -> Schema:
        """Declare a field. Re-declaring a name replaces it in place."""
        self._attributes[name] = Attribute(name=name, type=type_, required=required, default=default,
            alias=alias, coerce=coerce, predicate=predicate)
        self._rebuild_accessors()
        return self

    def validate(self, label: str, predicate: Predicate | None = None):
        """Register a cross-field validator.

        The predicate receives the payload. A falsy result records ``label``;
        an exception records its message. Without a predicate this returns a
        decorator.
        """
        if predicate is None:
            def decorator(fn: Predicate) -> Predicate:
                self._validators.append((label, fn))
                return fn
            return decorator
        self._validators.append((label, predicate))
        return self

    def extend(self, name: str) -> Schema:
        """Derive a schema that starts with every attribute and validator of this one."""
        return type(self)(name, parent=self)

    def _rebuild_accessors(self) -> None:
        accessors = {attr.alias: attr.name for attr in self._attributes.values() if attr.alias}
        accessors.update({name: name for name in self._attributes})
        self._accessors = accessors

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def schema_name(self) -> str:
        return self.name

    @property
    def attributes(self) -> Mapping[str, Attribute]:
        return dict(self._attributes)

    @property
    def validators(self) -> tuple[tuple[str, Predicate], ...]:
        return tuple(self._validators)

    def resolve(self, name: str) -> str | None:
        """Canonical attribute name for a name or alias."""
        return self._accessors.get(name)

    def describe(self) -> dict[str, Any]:
        return {"name": self.name, "attributes": [a.describe() for a in self._attributes.values()],
            "validators": [label for label, _ in self._validators]}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def new(self, data: Mapping[str, Any] | None = None) -> Payload:
        """Strict construction from a mapping. Unknown keys raise NoAttributeError."""
        if data is not None and not isinstance(data, Mapping):
            raise TypeError(f"{self.name} must be constructed from a mapping, got {type(data).__name__}")
        payload = self.payload_class(self)
        for key, value in (data or {}).items():
            payload.set(str(key), value)
        return payload

    __call__ = new

    def import_from(self, source: Any) -> Payload:
        """Graceful construction from a mapping, a payload or any object.

        Missing data falls back to defaults, extra data is ignored.
        """
        payload = self.payload_class(self)
        for name, attr in self._attributes.items():
            value = _extract(source, attr)
            if attr.is_schema and value is not UNSET and value is not None:
                value = attr.type.import_from(value)
            payload.set(name, value)
        return payload

    def coerce(self, value: Any) -> Any:
        """Turn a raw value assigned to a field of this schema type into a payload."""
        if isinstance(value, Mapping):
            return self.new(value)
        return value

    def is_schema_of(self, payload: Any) -> bool:
        return isinstance(payload, Payload) and payload.is_a(self)


def _extract(source: Any, attr: Attribute) -> Any:
    if isinstance(source, Mapping):
        for key in (attr.alias, attr.name):
            if key is not None and key in source:
                return source[key]
        return attr.initial_value()

    if isinstance(source, Payload):
        try:
            return source.get(attr.name)
        except NoAttributeError:
            return attr.initial_value()

    for key in (attr.obj_attribute_name, attr.name):
        if source is not None and source is not UNSET and hasattr(source, key):
            value = getattr(source, key)
            return value() if callable(value) and not isinstance(value, type) else value
    return attr.initial_value()


class Payload:
    """Mutable instance of a schema.

    Every declared attribute is present in the value map, initialized to its
    default or to UNSET. Not safe for concurrent mutation; confine a payload
    (and the tree it owns) to one request at a time.
    """

    __slots__ = ("schema", "_values", "_errors", "_owner")

    def __init__(self, schema: Schema):
        self.schema = schema
        self._values: dict[str, Any] = {name: attr.initial_value() for name, attr in schema._attributes.items()}
        self._errors: list[str] | None = None
        self._owner: Payload | None = None

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """Read a field by name or alias. UNSET reads as None."""
        canonical = self.schema.resolve(name)
        if canonical is None:
            raise NoAttributeError(name, self.schema.name)
        value = self._values[canonical]
        return None if value is UNSET else value

    def set(self, name: str, value: Any) -> None:
        """Assign a field by name or alias, building nested payloads from raw data."""
        canonical = self.schema.resolve(name)
        if canonical is None:
            raise NoAttributeError(name, self.schema.name)
        attr = self.schema._attributes[canonical]
        if attr.is_schema:
            if not isinstance(value, Payload) and value is not UNSET and value is not None:
                value = attr.type.coerce(value)
        elif attr.coerce:
            from .coercion import coerce_or_none
            if (coerced := coerce_or_none(value, attr.type)) is not None:
                value = coerced
        self._assign(canonical, value)

    def _assign(self, name: str, value: Any) -> None:
        self._release(self._values.get(name))
        self._values[name] = self._adopt(value)
        self.invalidate()

    def _adopt(self, value: Any) -> Any:
        """Take ownership of a nested payload, copying it if another payload owns it."""
        if isinstance(value, Payload):
            if value._owner is not None and value._owner is not self:
                value = copy.deepcopy(value)
            value._owner = self
        return value

    def _release(self, value: Any) -> Any:
        if isinstance(value, Payload) and value._owner is self:
            value._owner = None
        return value

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.schema.resolve(name) is not None

    def keys(self) -> Iterator[str]:
        return iter(self._values)

    def raw(self, name: str) -> Any:
        """Stored value including UNSET; for validators that must tell them apart."""
        if (canonical := self.schema.resolve(name)) is None:
            raise NoAttributeError(name, self.schema.name)
        return self._values[canonical]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def invalidate(self) -> None:
        """Drop the cached validation result here and in every owning payload."""
        self._errors = None
        if self._owner is not None:
            self._owner.invalidate()

    def is_valid(self) -> bool:
        """Validate against the schema. Memoized until the next mutation."""
        if self._errors is None:
            self._errors = self._run_validation()
        return not self._errors

    def _run_validation(self) -> list[str]:
        from .validators import validate_payload
        return validate_payload(self.schema, self)

    @property
    def errors(self) -> list[str]:
        """Messages from the latest validation."""
        self.is_valid()
        return list(self._errors or [])

    def is_a(self, schema: Any) -> bool:
        """True only for the exact schema; derived schemas do not count."""
        return schema is self.schema

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def field_values(self) -> dict[str, Any]:
        return {name: self.get(name) for name in self._values}

    def to_data(self) -> dict[str, Any]:
        """Plain data with nested payloads expanded; keys are canonical names."""
        return {name: to_plain(self.get(name)) for name in self._values}

    to_dict = to_data

    def copy(self) -> Payload:
        return copy.deepcopy(self)

    def __deepcopy__(self, memo: dict) -> Payload:
        clone = type(self).__new__(type(self))
        clone.schema = self.schema
        clone._values = {k: clone._adopt(v) for k, v in copy.deepcopy(self._values, memo).items()}
        clone._errors = None
        clone._owner = None
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Payload):
            return NotImplemented
        return other.schema is self.schema and other.field_values() == self.field_values()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"{self.schema.name}({fields})"


Schema.payload_class = Payload


def to_plain(value: Any) -> Any:
    """Recursively expand payloads and containers into plain data."""
    if isinstance(value, Payload):
        return value.to_data()
    if isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return None if value is UNSET else value
