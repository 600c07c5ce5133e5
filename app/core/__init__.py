"""Core infrastructure: config, logging, middleware, exceptions."""

from app.core.config import Settings, get_settings
from app.core.logging import get_logger, request_id_ctx

__all__ = [
    "Settings",
    "get_logger",
    "get_settings",
    "request_id_ctx",
]
