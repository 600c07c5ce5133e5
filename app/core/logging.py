"""Structured logging with structlog and request_id context."""

import logging
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any

import structlog

from app.core.config import get_settings

# Correlation ID of the request currently being served
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def add_request_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Attach the current request_id (if any) to the event."""
    request_id = request_id_ctx.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_app_env(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Tag every event with the deployment environment."""
    event_dict.setdefault("app_env", get_settings().app_env)
    return event_dict


def build_processors(log_format: str) -> list[structlog.types.Processor]:
    """Build the structlog processor chain for a given output format.

    Args:
        log_format: "json" for machine-readable output, "console" for humans.

    Returns:
        Ordered list of processors ending in a renderer.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_request_id,
        add_app_env,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def configure_logging() -> None:
    """Configure structlog for the application."""
    settings = get_settings()

    structlog.configure(
        processors=build_processors(settings.log_format),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        structlog logger; request_id is added by the processor chain.
    """
    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return logger
