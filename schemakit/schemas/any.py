"""Sentinel schemas.

``EMPTY`` declares nothing: constructing it with any key raises
NoAttributeError and every import of it is valid. ``ANY`` is the opposite,
an open record that stores whatever keys it is given and never fails
validation.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

from schemakit.validation.schema import Payload, Schema, to_plain


class AnySchema(Schema):
    """Schema accepting arbitrary keys with no per-field checks."""

    def __init__(self, name: str = "Any", *, parent: AnySchema | None = None):
        super().__init__(name, parent=parent)

    def import_from(self, source: Any) -> AnyPayload:
        if isinstance(source, Payload):
            data = source.to_data()
            return self.new(data if isinstance(data, Mapping) else {})
        if isinstance(source, Mapping):
            return self.new(source)
        if source is None:
            return self.new()
        public = {k: v for k, v in getattr(source, "__dict__", {}).items() if not k.startswith("_")}
        return self.new(public)


class AnyPayload(Payload):
    __slots__ = ()

    def get(self, name: str) -> Any:
        return self._values.get(name)

    def set(self, name: str, value: Any) -> None:
        self._assign(name, value)

    def raw(self, name: str) -> Any:
        return self._values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def keys(self) -> Iterator[str]:
        return iter(list(self._values))

    def to_data(self) -> dict[str, Any]:
        return {name: to_plain(value) for name, value in self._values.items()}

    to_dict = to_data


AnySchema.payload_class = AnyPayload

ANY = AnySchema()
EMPTY = Schema("Empty")
