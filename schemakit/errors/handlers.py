"""FastAPI Exception Handlers

Converts schemakit errors raised in route handlers and dependencies into
structured JSON responses, with the status taken from the error code.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemakit.logging import get_logger

from .types import ErrorCode, SchemaKitError

log = get_logger("schemakit.errors.handlers")


def error_to_response(error: SchemaKitError, request: Request | None = None) -> JSONResponse:
    """Convert a SchemaKitError to a JSONResponse."""
    status_code = error.code.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_code=error.code.name,
        error_code_num=error.code.value,
        message=error.message,
        category=error.code.category,
        path=request.url.path if request is not None else None,
        request_id=request.headers.get("X-Request-ID") if request is not None else None,
        metadata=error.metadata,
    )

    return JSONResponse(status_code=status_code, content=error.to_dict())


async def schemakit_error_handler(request: Request, exc: SchemaKitError) -> JSONResponse:
    """Handle every SchemaKitError raised while serving a request."""
    return error_to_response(exc, request)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler; logs the traceback and hides details from the client."""
    log.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
    )
    error = SchemaKitError("An unexpected error occurred")
    return JSONResponse(status_code=ErrorCode.E9000_INTERNAL_GENERIC.http_status, content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on a FastAPI app.

    Usage:
        from schemakit.errors import register_error_handlers

        app = FastAPI()
        register_error_handlers(app)
    """
    app.add_exception_handler(SchemaKitError, schemakit_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
