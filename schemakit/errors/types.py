"""Error taxonomy and Result types.

Schema errors are exceptions distinguishable by kind so that boundary
layers can map them to transport-specific responses:

- ValidationError: a payload failed validation (carries every message)
- NoAttributeError: a caller referenced a field the schema never declared
- InvalidPayloadError: collection operands have different element types
- SchemaNotDefinedError / NoPayloadError: integration-layer misuse
- InvalidRequestError / InvalidResponseError / InvalidJSONError: wire problems

The Result monad (Ok/Err) is used by code that prefers returning failures
over raising them, e.g. coercion rules and boundary parse functions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterator, NoReturn, TypeVar, Union, final

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E2xxx: Validation errors
    E4xxx: Schema contract errors
    E9xxx: Internal/programming errors
    """
    # Validation (E2xxx)
    E2000_VALIDATION_GENERIC = 2000
    E2002_INVALID_FORMAT = 2002
    E2021_INVALID_JSON = 2021
    E2030_INVALID_REQUEST = 2030
    E2031_INVALID_RESPONSE = 2031

    # Schema contract (E4xxx)
    E4020_NO_ATTRIBUTE = 4020
    E4021_SCHEMA_MISMATCH = 4021
    E4022_INVALID_PAYLOAD = 4022

    # Internal (E9xxx)
    E9000_INTERNAL_GENERIC = 9000
    E9010_SCHEMA_NOT_DEFINED = 9010
    E9011_NO_PAYLOAD = 9011

    @property
    def http_status(self) -> int:
        """Map error code to appropriate HTTP status."""
        code = self.value
        if code in (2031, 4021):
            return 500
        if 2000 <= code < 2100:
            return 400
        if 4000 <= code < 4100:
            return 422
        return 500

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 2000 <= code < 3000:
            return "validation"
        if 4000 <= code < 5000:
            return "schema"
        return "internal"


class SchemaKitError(Exception):
    """Base class for every error raised by schemakit."""
    code: ErrorCode = ErrorCode.E9000_INTERNAL_GENERIC
    default_message: str = "Schema error"

    def __init__(self, message: str | None = None, **metadata: Any):
        self.message = message or self.default_message
        self.metadata = metadata
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for API responses."""
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "type": type(self).__name__,
                "message": self.message,
                "category": self.code.category,
                "metadata": self.metadata,
            }
        }


class ValidationError(SchemaKitError):
    """One or more validation messages, raised when a caller decides an
    invalid payload is fatal. The validation algorithm itself never raises
    this for ordinary shape mismatches; cross-validators may raise it to
    report several messages at once.
    """
    code = ErrorCode.E2000_VALIDATION_GENERIC
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, messages: list[str] | None = None, **metadata: Any):
        self.messages = list(messages) if messages is not None else ([message] if message else [])
        super().__init__(message or self._summarize(self.messages), **metadata)

    @staticmethod
    def _summarize(messages: list[str]) -> str | None:
        if not messages: return None
        return messages[0] if len(messages) == 1 else "\n".join(messages)

    @classmethod
    def from_errors(cls, errors: list[str]) -> ValidationError:
        """Construct an error carrying several validation messages."""
        return cls(messages=errors)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["error"]["errors"] = list(self.messages)
        result["error"]["error_count"] = len(self.messages)
        return result


class NoAttributeError(SchemaKitError):
    """A field name was used that the schema never declared."""
    code = ErrorCode.E4020_NO_ATTRIBUTE

    def __init__(self, name: str, schema_name: str | None = None):
        self.name, self.schema_name = name, schema_name
        where = f" on {schema_name}" if schema_name else ""
        super().__init__(f"No attribute '{name}'{where}", attribute=name, schema=schema_name)


class InvalidPayloadError(SchemaKitError):
    """Collection operands do not share an element type."""
    code = ErrorCode.E4022_INVALID_PAYLOAD
    default_message = "Operand is not a payload of the same collection type"


class SchemaNotDefinedError(SchemaKitError):
    """An expected schema was never established before use."""
    code = ErrorCode.E9010_SCHEMA_NOT_DEFINED
    default_message = "Schema is not defined"


class NoPayloadError(SchemaKitError):
    """An expected payload was never established before use."""
    code = ErrorCode.E9011_NO_PAYLOAD
    default_message = "No payload available"


class InvalidJSONError(SchemaKitError):
    """Text handed to the JSON serializer could not be decoded."""
    code = ErrorCode.E2021_INVALID_JSON
    default_message = "Could not parse JSON"


class InvalidRequestError(SchemaKitError):
    code = ErrorCode.E2030_INVALID_REQUEST
    default_message = "Could not parse request body"


class InvalidResponseError(SchemaKitError):
    code = ErrorCode.E2031_INVALID_RESPONSE
    default_message = "Could not parse response body"


class SchemaMismatchError(InvalidResponseError):
    """An outgoing payload belongs to a different schema than the one declared."""
    code = ErrorCode.E4021_SCHEMA_MISMATCH
    default_message = "Response schema does not match"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def __iter__(self) -> Iterator[T]:
        yield self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[Any], U]) -> Err[E]:
        return self

    def __iter__(self) -> Iterator:
        return iter([])


Result = Union[Ok[T], Err[E]]


def try_result(f: Callable[[], T]) -> Result[T, SchemaKitError]:
    """Execute function and wrap the outcome; only schemakit errors are captured."""
    try:
        return Ok(f())
    except SchemaKitError as e:
        return Err(e)
