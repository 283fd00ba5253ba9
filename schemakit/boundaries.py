"""Validation at HTTP Boundaries

Parse-don't-validate for FastAPI/Starlette endpoints:
- Request bodies become payloads of a request schema before the handler runs
- Responses are rendered from valid payloads only
- Handlers returning plain data can have it checked against a response schema

Usage:
    from typing import Annotated
    from fastapi import Depends, FastAPI

    app = FastAPI()
    register_error_handlers(app)

    @app.post("/users")
    async def create_user(user: Annotated[Payload, Depends(ValidatedBody(User))]):
        return render_payload(user, User, status_code=201)

    @app.get("/users/{id}")
    @validate_response(User)
    async def get_user(id: int):
        return {"id": id, "email": "a@b.c"}
"""
import copy
import json
from collections.abc import Mapping
from functools import wraps
from typing import Any, Callable

from fastapi import Request
from starlette.responses import Response

from schemakit.errors import (
    Err,
    InvalidJSONError,
    InvalidRequestError,
    InvalidResponseError,
    NoPayloadError,
    Ok,
    Result,
    SchemaKitError,
    SchemaMismatchError,
    SchemaNotDefinedError,
    ValidationError,
)
from schemakit.logging import boundary_logger, schema_context
from schemakit.serializers import data_to_payload, from_json, to_json
from schemakit.validation.schema import Payload, Schema

REQUEST_PAYLOAD_KEY = "schemakit_payload"


# ============================================================================
# Functional Boundary Parsers
# ============================================================================

def parse_ingress(schema: Schema, data: Any) -> Result[Payload, SchemaKitError]:
    """Parse and validate data entering the system.

    Usage:
        result = parse_ingress(User, body)
        if result.is_err():
            return error_to_response(result.unwrap_err())
        user = result.unwrap()
    """
    try:
        payload = data_to_payload(data, schema)
    except SchemaKitError as e:
        return Err(e)
    except TypeError as e:
        return Err(InvalidRequestError(str(e), schema=schema.name))
    if not payload.is_valid():
        return Err(ValidationError.from_errors(payload.errors))
    return Ok(payload)


def parse_egress(schema: Schema, data: Any) -> Result[Payload, SchemaKitError]:
    """Parse and validate data leaving the system. Failures are InvalidResponseError."""
    if isinstance(data, Payload):
        payload = data
    else:
        try:
            payload = data_to_payload(data, schema)
        except (SchemaKitError, TypeError) as e:
            return Err(InvalidResponseError(str(e), schema=schema.name))
    if not payload.is_a(schema):
        return Err(SchemaMismatchError(schema=schema.name))
    if not payload.is_valid():
        return Err(InvalidResponseError("; ".join(payload.errors), schema=schema.name, errors=payload.errors))
    return Ok(payload)


# ============================================================================
# FastAPI Integration
# ============================================================================

class ValidatedBody:
    """FastAPI dependency for a validated request payload.

    An empty body yields ``schema.new()``. Query parameters naming a
    declared attribute are assigned on top of the body. The payload is also
    stored on ``request.state`` for :func:`request_payload`.

    Usage:
        @app.post("/users")
        async def create_user(user: Annotated[Payload, Depends(ValidatedBody(User))]):
            ...
    """

    def __init__(self, schema: Schema | None):
        if schema is None:
            raise SchemaNotDefinedError("ValidatedBody requires a request schema")
        self.schema = schema

    async def __call__(self, request: Request) -> Payload:
        body = await request.body()
        with schema_context(self.schema.name, path=request.url.path):
            payload = self._parse(body, request)
        setattr(request.state, REQUEST_PAYLOAD_KEY, payload)
        return payload

    def _parse(self, body: bytes, request: Request) -> Payload:
        if body.strip():
            try:
                payload = from_json(body, self.schema)
            except InvalidJSONError as e:
                boundary_logger().warning("request_body_unparseable", error=e.message)
                raise InvalidRequestError(schema=self.schema.name) from e
            except TypeError as e:
                raise InvalidRequestError(str(e), schema=self.schema.name) from e
        else:
            payload = self.schema.new()

        for key, value in request.query_params.items():
            if key in self.schema.attributes:
                payload.set(key, value)

        if not payload.is_valid():
            boundary_logger().debug("request_payload_invalid", errors=payload.errors)
            raise ValidationError.from_errors(payload.errors)
        return payload


def request_payload(request: Request) -> Payload:
    """A copy of the payload validated for this request."""
    payload = getattr(request.state, REQUEST_PAYLOAD_KEY, None)
    if payload is None:
        raise NoPayloadError("No request payload was validated for this request")
    return copy.deepcopy(payload)


def render_payload(
    payload: Payload,
    schema: Schema | None = None,
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """JSON response for a valid payload, optionally checked against ``schema``."""
    if not payload.is_valid():
        raise ValidationError.from_errors(payload.errors)
    if schema is not None and not payload.is_a(schema):
        raise SchemaMismatchError(schema=schema.name)
    return Response(content=to_json(payload), status_code=status_code, headers=headers,
        media_type="application/json")


def validate_response(schema: Schema | None) -> Callable:
    """Decorator validating what an async endpoint returns.

    Payloads and mappings are rendered through :func:`render_payload`;
    a ready-made Response is decoded and checked, then passed through.

    Usage:
        @app.get("/users/{id}")
        @validate_response(User)
        async def get_user(id: int):
            return await load_user(id)
    """
    if schema is None:
        raise SchemaNotDefinedError("validate_response requires a response schema")

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)

            if isinstance(result, Response):
                try:
                    data = json.loads(result.body)
                except ValueError as e:
                    raise InvalidResponseError(schema=schema.name) from e
            else:
                data = result

            with schema_context(schema.name, endpoint=func.__name__):
                parsed = parse_egress(schema, data)
                if parsed.is_err():
                    error = parsed.unwrap_err()
                    boundary_logger().error("response_validation_failed", error=error.message)
                    raise error

            if isinstance(result, Response):
                return result
            return render_payload(parsed.unwrap(), schema)
        return wrapper
    return decorator
