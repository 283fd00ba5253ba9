"""Error taxonomy and FastAPI handlers.

Usage:
    from schemakit.errors import NoAttributeError, ValidationError

    payload = Person.new({"name": "Al"})
    if not payload.is_valid():
        raise ValidationError.from_errors(payload.errors)
"""
from .types import (
    ErrorCode,
    SchemaKitError,
    ValidationError,
    NoAttributeError,
    InvalidPayloadError,
    SchemaNotDefinedError,
    NoPayloadError,
    InvalidJSONError,
    InvalidRequestError,
    InvalidResponseError,
    SchemaMismatchError,
    Result,
    Ok,
    Err,
    try_result,
)
from .handlers import register_error_handlers, error_to_response

__all__ = [
    "ErrorCode",
    "SchemaKitError",
    "ValidationError",
    "NoAttributeError",
    "InvalidPayloadError",
    "SchemaNotDefinedError",
    "NoPayloadError",
    "InvalidJSONError",
    "InvalidRequestError",
    "InvalidResponseError",
    "SchemaMismatchError",
    "Result",
    "Ok",
    "Err",
    "try_result",
    "register_error_handlers",
    "error_to_response",
]
