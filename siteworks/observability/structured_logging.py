"""
Siteworks - Structured Logging

JSON log formatting with trace-id propagation through contextvars.
Modules log through logging.getLogger(__name__) and pass structured
fields via `extra`; this module decides how those records are rendered.
"""

import contextvars
import json
import logging
from datetime import UTC, datetime
from uuid import uuid4

_trace_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)

# LogRecord attributes that are never copied into the JSON payload
_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    )
)

ROOT_LOGGER = "siteworks"


def get_trace_id() -> str | None:
    """Get current trace ID from context."""
    return _trace_id_ctx.get()


def set_trace_id(trace_id: str | None) -> None:
    """Set trace ID in context."""
    _trace_id_ctx.set(trace_id)


def generate_trace_id() -> str:
    """Generate a new trace ID and set it in context."""
    trace_id = str(uuid4())
    set_trace_id(trace_id)
    return trace_id


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        trace_id = _trace_id_ctx.get()
        if trace_id:
            log_data["trace_id"] = trace_id

        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # default=str keeps UUIDs and datetimes in `extra` serializable
        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", json_format: bool = True) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name
        json_format: Emit JSON records instead of plain text

    Returns:
        The configured "siteworks" logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
