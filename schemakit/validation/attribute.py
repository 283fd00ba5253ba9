"""Attribute (field) descriptors.

An attribute records everything a schema knows about one named field: its
declared type, whether it is required, its default, an optional alias used
when importing from foreign objects, and an optional per-field predicate.
Attributes carry no validation logic of their own; the validation
algorithm in :mod:`schemakit.validation.validators` is parameterized by them.
"""
from __future__ import annotations

import copy
import numbers
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Final

if TYPE_CHECKING:
    from .schema import Schema


class _Unset:
    """Marker for a field that was never assigned.

    Distinct from ``None``: an explicit ``None`` passes the required check,
    ``UNSET`` does not.
    """

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset()


_TYPE_NAMES: dict[Any, str] = {
    str: "String",
    int: "Integer",
    float: "Float",
    bool: "Boolean",
    Decimal: "Decimal",
    numbers.Number: "Numeric",
    numbers.Real: "Numeric",
    datetime: "Time",
    date: "Date",
    dict: "Hash",
    list: "Array",
}


def type_name(declared: Any) -> str:
    """Human-readable name of a declared type for error messages."""
    if (name := _TYPE_NAMES.get(declared)) is not None:
        return name
    if (schema_name := getattr(declared, "schema_name", None)) is not None:
        return schema_name
    return getattr(declared, "__name__", repr(declared))


@dataclass(frozen=True, slots=True)
class Attribute:
    """Immutable description of one schema field."""
    name: str
    type: Any
    required: bool = False
    default: Any = UNSET
    alias: str | None = None
    coerce: bool = False
    predicate: Callable[[Any], bool] | None = None

    @property
    def obj_attribute_name(self) -> str:
        """Name looked up on foreign objects during import. Alias wins."""
        return self.alias or self.name

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET

    @property
    def is_schema(self) -> bool:
        return is_schema_type(self.type)

    def initial_value(self) -> Any:
        """Default for a fresh payload; mutable defaults are copied per payload."""
        if isinstance(self.default, (list, dict, set)):
            return copy.deepcopy(self.default)
        return self.default

    def describe(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "type": type_name(self.type), "required": self.required}
        if self.has_default: result["default"] = self.default
        if self.alias: result["alias"] = self.alias
        return result


def is_schema_type(declared: Any) -> bool:
    from .schema import Schema
    return isinstance(declared, Schema)
