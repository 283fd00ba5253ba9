"""Explicit Opt-in Coercion

Coercion is never implicit: an attribute declared with ``coerce=True``
converts string input (typically from JSON or query strings) into its
declared primitive type before storing it. A value that cannot be coerced
is stored unchanged so validation reports the type mismatch as usual.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, TypeVar

from schemakit.errors import Err, ErrorCode, Ok, Result, SchemaKitError

T = TypeVar("T")
S = TypeVar("S")


class CoercionError(SchemaKitError):
    code = ErrorCode.E2002_INVALID_FORMAT
    default_message = "Cannot coerce value"


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[S, T]):
    """Converts values of ``source_types`` into ``target_type``."""

    @property
    @abstractmethod
    def source_types(self) -> tuple[type, ...]:
        """Types this rule can coerce from."""

    @property
    @abstractmethod
    def target_type(self) -> type[T]:
        """Type this rule coerces to."""

    @abstractmethod
    def coerce(self, value: Any) -> Result[T, CoercionError]:
        """Coerce value to target type."""

    def can_coerce(self, value: Any) -> bool:
        return isinstance(value, self.source_types)

    def __call__(self, value: Any) -> Result[T, CoercionError]:
        return self.coerce(value)


def _failure(value: Any, target: str) -> Err[CoercionError]:
    return Err(CoercionError(f"Cannot coerce '{value}' to {target}", value=str(value)[:50], target=target))


@dataclass(frozen=True, slots=True)
class StringToInt(CoercionRule[str, int]):
    """Coerce string to integer."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> Result[int, CoercionError]:
        try:
            return Ok(int(value.strip()))
        except (ValueError, AttributeError):
            return _failure(value, "int")


@dataclass(frozen=True, slots=True)
class StringToFloat(CoercionRule[str, float]):
    """Coerce string to float."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, int)

    @property
    def target_type(self) -> type[float]:
        return float

    def can_coerce(self, value: Any) -> bool:
        return isinstance(value, self.source_types) and not isinstance(value, bool)

    def coerce(self, value: Any) -> Result[float, CoercionError]:
        try:
            return Ok(float(value.strip() if isinstance(value, str) else value))
        except ValueError:
            return _failure(value, "float")


@dataclass(frozen=True, slots=True)
class StringToDecimal(CoercionRule[str, Decimal]):
    """Coerce string to Decimal."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, int)

    @property
    def target_type(self) -> type[Decimal]:
        return Decimal

    def can_coerce(self, value: Any) -> bool:
        return isinstance(value, self.source_types) and not isinstance(value, bool)

    def coerce(self, value: Any) -> Result[Decimal, CoercionError]:
        try:
            return Ok(Decimal(value.strip() if isinstance(value, str) else value))
        except InvalidOperation:
            return _failure(value, "Decimal")


@dataclass(frozen=True, slots=True)
class StringToBool(CoercionRule[str, bool]):
    """Coerce common boolean spellings ("true", "0", "yes", ...)."""
    true_values: frozenset[str] = frozenset({"true", "1", "yes", "on"})
    false_values: frozenset[str] = frozenset({"false", "0", "no", "off"})

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[bool]:
        return bool

    def coerce(self, value: Any) -> Result[bool, CoercionError]:
        normalized = value.strip().lower()
        if normalized in self.true_values: return Ok(True)
        if normalized in self.false_values: return Ok(False)
        return _failure(value, "bool")


@dataclass(frozen=True, slots=True)
class ISO8601ToDateTime(CoercionRule[str, datetime]):
    """Coerce ISO8601 string (``Z`` suffix allowed) to datetime."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[datetime]:
        return datetime

    def coerce(self, value: Any) -> Result[datetime, CoercionError]:
        try:
            return Ok(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        except ValueError:
            return _failure(value, "datetime")


@dataclass(frozen=True, slots=True)
class ISO8601ToDate(CoercionRule[str, date]):
    """Coerce ISO8601 string to date."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[date]:
        return date

    def coerce(self, value: Any) -> Result[date, CoercionError]:
        try:
            return Ok(date.fromisoformat(value.strip()))
        except ValueError:
            return _failure(value, "date")


@dataclass(frozen=True, slots=True)
class ExplicitCoercion:
    """Registry of coercion rules.

    Usage:
        coercer = ExplicitCoercion()
        coercer.coerce("123", int)      # Ok(123)
        coercer.coerce("abc", int)      # Err(CoercionError)
    """
    rules: tuple[CoercionRule, ...] = field(default_factory=lambda: (
        StringToInt(),
        StringToFloat(),
        StringToDecimal(),
        StringToBool(),
        ISO8601ToDateTime(),
        ISO8601ToDate(),
    ))

    def add_rule(self, rule: CoercionRule) -> ExplicitCoercion:
        """Add a coercion rule, returning new instance."""
        return ExplicitCoercion(rules=(*self.rules, rule))

    def coerce(self, value: Any, target_type: type[T]) -> Result[T, CoercionError]:
        if isinstance(value, target_type) and not (isinstance(value, bool) and target_type is not bool):
            return Ok(value)
        for rule in self.rules:
            if rule.target_type is target_type and rule.can_coerce(value):
                if (result := rule.coerce(value)).is_ok():
                    return result
        return Err(CoercionError(f"Cannot coerce {type(value).__name__} to {getattr(target_type, '__name__', target_type)}"))

    def coerce_or_none(self, value: Any, target_type: type[T]) -> T | None:
        result = self.coerce(value, target_type)
        return result.unwrap() if result.is_ok() else None


DEFAULT_COERCER = ExplicitCoercion()


def coerce(value: Any, target_type: type[T]) -> Result[T, CoercionError]:
    """Convenience function using default coercer."""
    return DEFAULT_COERCER.coerce(value, target_type)


def coerce_or_none(value: Any, target_type: type[T]) -> T | None:
    """Convenience function for coerce-or-none pattern."""
    return DEFAULT_COERCER.coerce_or_none(value, target_type)
