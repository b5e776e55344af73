"""Structured logging utilities for web action invocations.

This module provides JSON-formatted logging with activation context,
suitable for querying the OpenWhisk activation log stream.

SECURITY NOTES:
- Use redact_headers() before logging request or response headers
- Never log request bodies; they may carry credentials in variables
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import MutableMapping
from typing import Optional

from ow_graphql.utils.headers import redact_headers

# Context variables for activation tracking
activation_id: ContextVar[str] = ContextVar("activation_id", default="")
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Produces one JSON object per line, including activation context,
    fields passed through ``extra`` and exception details.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        act_id = activation_id.get()
        if act_id:
            log_data["activation_id"] = act_id

        corr_id = correlation_id.get()
        if corr_id:
            log_data["correlation_id"] = corr_id

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        }
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges its bound context into every record."""

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structured logging for action execution.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to
               LOG_LEVEL environment variable or INFO.
    """
    log_level: str = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredLogFormatter())
    root_logger.addHandler(handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("graphql").setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> ContextLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name (typically __name__).
        **extra: Additional context to include in all log messages.

    Returns:
        A ContextLogger instance.
    """
    return ContextLogger(logging.getLogger(name), extra)


def set_request_context(
    act_id: Optional[str] = None,
    corr_id: Optional[str] = None,
) -> None:
    """Set activation context for logging.

    Call this at the start of each invocation. When ``act_id`` is not
    given, the ``__OW_ACTIVATION_ID`` environment variable is used.

    Args:
        act_id: OpenWhisk activation ID.
        corr_id: Correlation ID for distributed tracing.
    """
    act_id = act_id or os.getenv("__OW_ACTIVATION_ID")
    if act_id:
        activation_id.set(act_id)
    if corr_id:
        correlation_id.set(corr_id)


def clear_request_context() -> None:
    """Clear activation context after an invocation."""
    activation_id.set("")
    correlation_id.set("")


def log_invocation(
    logger: ContextLogger,
    method: str,
    path: Optional[str],
    headers: dict[str, Any],
) -> None:
    """Log invocation details at DEBUG level with headers redacted."""
    logger.debug(
        "Invocation received",
        extra={
            "invocation": {
                "method": method,
                "path": path,
                "headers": redact_headers(headers),
            }
        },
        stacklevel=2,
    )


def log_response(
    logger: ContextLogger,
    status_code: int,
    outcome: str,
    duration_ms: Optional[float] = None,
) -> None:
    """Log invocation response details.

    Args:
        logger: The logger to use.
        status_code: HTTP status code of the response.
        outcome: Which reply path produced the response.
        duration_ms: Invocation duration in milliseconds.
    """
    log_data: dict[str, Any] = {"status_code": status_code, "outcome": outcome}
    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    level = logging.INFO if status_code < 400 else logging.WARNING
    logger.log(
        level, "Invocation response", extra={"response": log_data}, stacklevel=2
    )
