"""
Structured Logging Configuration
structlog on top of stdlib logging, with request context and secret redaction
"""
from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping

import structlog

REDACTED = "[redacted]"

# Event keys that may carry credentials; their values never reach a log sink.
SENSITIVE_KEYS = frozenset({
    "password",
    "current_password",
    "new_password",
    "password_hash",
    "access_token",
    "refresh_token",
    "token",
    "authorization",
    "api_key",
    "x_api_key",
})


def merge_extra(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Lift ``extra={...}`` (stdlib call style) into top-level event keys."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    return event_dict


def redact_secrets(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structured logging for the application.

    Processors, in order:
    - bound request context (trace_id, path, identity_id, tenant_id)
    - ``extra`` lifting and secret redaction
    - logger name, level, ISO timestamp, exception info
    - JSON (production) or console (development) rendering

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to output JSON format (True for prod, False for dev)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        merge_extra,
        redact_secrets,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Usage:
        logger = get_logger(__name__)
        logger.info("Login succeeded", extra={"identity_id": str(identity.id)})
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Replace the request-scoped context (once per request, by the middleware)."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def add_context(**kwargs: Any) -> None:
    """Add keys without clearing, e.g. identity_id once the caller is authenticated."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
