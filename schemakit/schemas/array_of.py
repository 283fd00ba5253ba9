"""Collection schemas.

``array_of(element_type)`` builds a schema whose payloads behave like a
list of one element type. The element type may be a primitive type or a
schema; schema elements are normalized on insertion (mappings are
constructed strictly, other objects imported gracefully) and must each be
valid for the collection to be valid.

Element types are invariant: ``array_of(int)`` does not accept floats.

Usage:
    Numbers = array_of(numbers.Number)
    numbers_payload = Numbers.new([1, 2.0])
    numbers_payload.push("x")
    numbers_payload.is_valid()   # False
    numbers_payload.errors       # ["Element[2] must be Numeric"]
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Iterator

from schemakit.errors import InvalidPayloadError, NoAttributeError, ValidationError
from schemakit.validation.attribute import UNSET, is_schema_type, type_name
from schemakit.validation.schema import Payload, Schema, to_plain
from schemakit.validation.validators import matches_type


class CollectionSchema(Schema):
    """Schema of an ordered sequence of ``element_type`` values."""

    def __init__(self, name: str | None = None, *, element_type: Any = None, parent: CollectionSchema | None = None):
        if parent is not None and element_type is None:
            element_type = parent.element_type
        self.element_type = element_type
        super().__init__(name or f"ArrayOf{type_name(element_type)}", parent=parent)
        if parent is None:
            self.validate(f"Elements must be {type_name(element_type)}", _elements_match)

    def extend(self, name: str) -> CollectionSchema:
        return type(self)(name, element_type=self.element_type, parent=self)

    @property
    def element_is_schema(self) -> bool:
        return is_schema_type(self.element_type)

    def new(self, elements: Iterable[Any] | None = None) -> CollectionPayload:
        """Build a collection from raw elements, normalizing each one."""
        if isinstance(elements, (Mapping, str, bytes)):
            raise TypeError(f"{self.name} must be constructed from a sequence, got {type(elements).__name__}")
        payload = self.payload_class(self)
        payload._elements = [payload._normalize(e) for e in (elements or ())]
        return payload

    __call__ = new

    def import_from(self, source: Any) -> CollectionPayload:
        """Gracefully build a collection from another collection, UNSET/None or any iterable."""
        payload = self.payload_class(self)
        if isinstance(source, CollectionPayload):
            source = source.elements
        elif source is None or source is UNSET:
            source = ()
        elif isinstance(source, (Mapping, str, bytes)) or not isinstance(source, Iterable):
            source = (source,)
        for element in source:
            payload.append(element)
        return payload

    def coerce(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return self.new(value)
        return value

    def normalize(self, element: Any) -> Any:
        """Shape a raw element for storage."""
        if not self.element_is_schema:
            return element
        if isinstance(element, Mapping):
            return self.element_type.new(element)
        if isinstance(element, Payload) and element.is_a(self.element_type):
            return element
        return self.element_type.import_from(element)

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), "element_type": type_name(self.element_type)}


def _elements_match(payload: CollectionPayload) -> bool:
    element_type = payload.schema.element_type
    offending = [
        f"Element[{i}] must be {type_name(element_type)}"
        for i, element in enumerate(payload.elements)
        if not _element_valid(element, element_type)
    ]
    if offending:
        raise ValidationError.from_errors(offending)
    return True


def _element_valid(element: Any, element_type: Any) -> bool:
    if is_schema_type(element_type):
        return isinstance(element, Payload) and element.is_a(element_type) and element.is_valid()
    return matches_type(element, element_type)


class CollectionPayload(Payload):
    """List-like payload. Mutations invalidate the cached validation result."""

    __slots__ = ("_elements",)

    schema: CollectionSchema

    def __init__(self, schema: CollectionSchema):
        super().__init__(schema)
        self._elements: list[Any] = []

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def elements(self) -> list[Any]:
        return list(self._elements)

    def _new(self, elements: Iterable[Any]) -> CollectionPayload:
        # Derived collections own copies of payload elements.
        return self.schema.new([copy.deepcopy(e) if isinstance(e, Payload) else e for e in elements])

    def _check_operand(self, other: Any) -> CollectionPayload:
        if not isinstance(other, CollectionPayload) or not other.is_a(self.schema):
            raise InvalidPayloadError(schema=self.schema.name)
        return other

    def _normalize(self, element: Any) -> Any:
        return self._adopt(self.schema.normalize(element))

    def _mutated(self) -> CollectionPayload:
        self.invalidate()
        return self

    def is_a(self, schema: Any) -> bool:
        """Any collection schema with the same element type matches."""
        return isinstance(schema, CollectionSchema) and schema.element_type == self.schema.element_type

    # ------------------------------------------------------------------
    # Field access: collections expose no named fields
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        if name == "elements":
            return self.elements
        raise NoAttributeError(name, self.schema.name)

    def set(self, name: str, value: Any) -> None:
        if name == "elements":
            self.replace(value)
            return
        raise NoAttributeError(name, self.schema.name)

    def raw(self, name: str) -> Any:
        raise NoAttributeError(name, self.schema.name)

    def __contains__(self, value: object) -> bool:
        return value in self._elements

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._elements))

    def each(self) -> Iterator[Any]:
        """Lazily yield elements in order; call again to restart."""
        for element in list(self._elements):
            yield element

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return self._new(self._elements[index])
        if isinstance(index, str):
            return self.get(index)
        return self._elements[index]

    def __setitem__(self, index: int | slice, value: Any) -> None:
        if isinstance(index, slice):
            self._elements[index] = [self._normalize(v) for v in value]
        elif isinstance(index, str):
            self.set(index, value)
            return
        else:
            self._elements[index] = self._normalize(value)
        self.invalidate()

    def __delitem__(self, index: int | slice) -> None:
        del self._elements[index]
        self.invalidate()

    def is_empty(self) -> bool:
        return not self._elements

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, element: Any) -> CollectionPayload:
        self._elements.append(self._normalize(element))
        return self._mutated()

    def push(self, *elements: Any) -> CollectionPayload:
        for element in elements:
            self._elements.append(self._normalize(element))
        return self._mutated()

    __lshift__ = append

    def extend(self, elements: Iterable[Any]) -> CollectionPayload:
        return self.push(*elements)

    def insert(self, index: int, element: Any) -> CollectionPayload:
        self._elements.insert(index, self._normalize(element))
        return self._mutated()

    def unshift(self, *elements: Any) -> CollectionPayload:
        """Prepend elements, keeping their given order."""
        self._elements[:0] = [self._normalize(e) for e in elements]
        return self._mutated()

    prepend = unshift

    def pop(self, n: int | None = None) -> Any:
        """Remove from the end: one element, or a new collection of the last ``n``."""
        if n is None:
            element = self._elements.pop()
            self.invalidate()
            return self._release(element)
        taken = self._elements[-n:] if n else []
        del self._elements[len(self._elements) - len(taken):]
        self.invalidate()
        return self._new(taken)

    def shift(self, n: int | None = None) -> Any:
        """Remove from the front: one element, or a new collection of the first ``n``."""
        if n is None:
            element = self._elements.pop(0)
            self.invalidate()
            return self._release(element)
        taken = self._elements[:n]
        del self._elements[:n]
        self.invalidate()
        return self._new(taken)

    def remove(self, element: Any) -> CollectionPayload:
        self._release(self._elements.pop(self._elements.index(element)))
        return self._mutated()

    def delete_at(self, index: int) -> Any:
        element = self._elements.pop(index)
        self.invalidate()
        return self._release(element)

    def clear(self) -> CollectionPayload:
        self._elements.clear()
        return self._mutated()

    def replace(self, elements: Iterable[Any]) -> CollectionPayload:
        self._elements = [self._normalize(e) for e in elements]
        return self._mutated()

    def reverse(self) -> CollectionPayload:
        self._elements.reverse()
        return self._mutated()

    def sort(self, *, key: Callable[[Any], Any] | None = None, reverse: bool = False) -> CollectionPayload:
        self._elements.sort(key=key, reverse=reverse)
        return self._mutated()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def first(self, n: int | None = None) -> Any:
        if n is None:
            return self._elements[0] if self._elements else None
        return self._new(self._elements[:n])

    def last(self, n: int | None = None) -> Any:
        if n is None:
            return self._elements[-1] if self._elements else None
        return self._new(self._elements[-n:] if n else [])

    def index(self, element: Any) -> int:
        return self._elements.index(element)

    def count(self, element: Any = UNSET) -> int:
        """Occurrences of ``element``; the length when called without one."""
        if element is UNSET:
            return len(self._elements)
        return self._elements.count(element)

    def find(self, predicate: Callable[[Any], bool]) -> Any:
        return next((e for e in self._elements if predicate(e)), None)

    def map(self, fn: Callable[[Any], Any]) -> CollectionPayload:
        return self._new(fn(e) for e in self._elements)

    def select(self, predicate: Callable[[Any], bool]) -> CollectionPayload:
        return self._new(e for e in self._elements if predicate(e))

    def reject(self, predicate: Callable[[Any], bool]) -> CollectionPayload:
        return self._new(e for e in self._elements if not predicate(e))

    # ------------------------------------------------------------------
    # Binary operations
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> CollectionPayload:
        return self._new(self._elements + self._check_operand(other)._elements)

    def __sub__(self, other: Any) -> CollectionPayload:
        excluded = self._check_operand(other)._elements
        return self._new(e for e in self._elements if e not in excluded)

    def __and__(self, other: Any) -> CollectionPayload:
        shared = self._check_operand(other)._elements
        result: list[Any] = []
        for element in self._elements:
            if element in shared and element not in result:
                result.append(element)
        return self._new(result)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Payload):
            return NotImplemented
        return other.is_a(self.schema) and isinstance(other, CollectionPayload) and self._elements == other._elements

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def field_values(self) -> dict[str, Any]:
        return {"elements": self.elements}

    def to_data(self) -> list[Any]:  # type: ignore[override]
        return [to_plain(e) for e in self._elements]

    to_dict = to_data

    def __deepcopy__(self, memo: dict) -> CollectionPayload:
        clone = type(self)(self.schema)
        clone._elements = [clone._adopt(e) for e in copy.deepcopy(self._elements, memo)]
        return clone

    def __repr__(self) -> str:
        return f"{self.schema.name}({self._elements!r})"


CollectionSchema.payload_class = CollectionPayload


def array_of(element_type: Any) -> CollectionSchema:
    """Schema for a list of ``element_type`` values."""
    return CollectionSchema(element_type=element_type)
