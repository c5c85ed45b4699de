"""
Contextual logging.

The correlation ID and request fields (method, path) live in context
variables set by ``CorrelationIdMiddleware``; loggers obtained from
``get_logger`` copy them into every record's ``extra`` so log lines from one
request can be tied together.
"""

import contextvars
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)
_request_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "request_context", default=None
)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install the root handler with ``LOG_FORMAT`` at ``level`` (name or number)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    An empty or missing ID is replaced with a fresh UUID4. Returns the ID
    actually bound.
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    _correlation_id.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    _correlation_id.set(None)


def set_request_context(**fields: Any) -> None:
    _request_context.set(dict(fields))


def clear_request_context() -> None:
    _request_context.set(None)


def get_logging_context() -> dict[str, Any]:
    """Timestamp plus whatever correlation ID and request fields are bound."""
    context: dict[str, Any] = {"timestamp": datetime.now(timezone.utc).isoformat()}

    correlation_id = _correlation_id.get()
    if correlation_id:
        context["correlation_id"] = correlation_id
    context.update(_request_context.get() or {})
    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """Merges the bound logging context into ``extra`` on every call."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**get_logging_context(), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    return ContextualLoggerAdapter(logging.getLogger(name), {})


def log_operation(
    logger: logging.Logger,
    operation: str,
    level: int = logging.INFO,
    success: bool = True,
    duration_ms: float | None = None,
    **context: Any,
) -> None:
    """
    Log one operation as a structured record.

    The message reads ``Operation: <name>`` (``Operation failed: <name>``
    when ``success`` is False) with the duration appended when known; the
    operation name, outcome, duration and ``context`` go into ``extra``.
    """
    extra = get_logging_context()
    extra.update(operation=operation, success=success, **context)

    prefix = "Operation" if success else "Operation failed"
    message = f"{prefix}: {operation}"
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
        message += f" (duration: {duration_ms:.2f}ms)"

    logger.log(level, message, extra=extra)
