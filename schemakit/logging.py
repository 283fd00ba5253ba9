"""Structured logging for schemakit.

schemakit only logs through the ``schemakit`` logger hierarchy and never
touches the root logger, so applications keep control of their own output.

- Colored console output for development, JSON for production
- Validation error lists are capped so large payloads do not flood logs
- Context propagation via contextvars (``schema_context``, ``bind_context``)
"""
import logging
import sys
from contextlib import contextmanager
from typing import Iterator

import structlog
from structlog.types import EventDict, Processor

from schemakit.config import get_settings

LIBRARY_LOGGER = "schemakit"
MAX_LOGGED_ERRORS = 10


def _add_library_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that tags events emitted by this library."""
    event_dict.setdefault("library", LIBRARY_LOGGER)
    return event_dict


def _cap_error_lists(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that truncates long ``errors`` lists and records the full count."""
    errors = event_dict.get("errors")
    if isinstance(errors, list) and len(errors) > MAX_LOGGED_ERRORS:
        event_dict["errors"] = errors[:MAX_LOGGED_ERRORS]
        event_dict["error_count"] = len(errors)
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors applied to structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_library_info,
        _cap_error_lists,
    ]


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog and the ``schemakit`` stdlib logger.

    Args:
        level: Log level name; unknown names fall back to INFO. Defaults to ``Settings.LOG_LEVEL``.
        json_logs: JSON output when True, colored console output otherwise. Defaults to ``Settings.LOG_JSON``.
    """
    settings = get_settings()
    level = level if level is not None else settings.LOG_LEVEL
    json_logs = json_logs if json_logs is not None else settings.LOG_JSON
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = get_shared_processors()

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(log_level)
    library_logger.propagate = False


def get_logger(name: str = LIBRARY_LOGGER) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """Bind key-value pairs to every later event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def schema_context(schema_name: str, **extra) -> Iterator[None]:
    """Tag events logged inside the block with the schema being processed."""
    with structlog.contextvars.bound_contextvars(schema=schema_name, **extra):
        yield


class LoggerRegistry:
    """Shared loggers for the library's domains, named ``schemakit.<domain>``."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"{LIBRARY_LOGGER}.{name}")
        return cls._loggers[name]


def schema_logger() -> structlog.stdlib.BoundLogger:
    """Schema definition and validation events."""
    return LoggerRegistry.get("schema")


def serializer_logger() -> structlog.stdlib.BoundLogger:
    """Wire conversion events."""
    return LoggerRegistry.get("serializer")


def boundary_logger() -> structlog.stdlib.BoundLogger:
    """HTTP ingress and egress events."""
    return LoggerRegistry.get("boundary")
