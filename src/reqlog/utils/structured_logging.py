r"""Structured logging utilities for request log records.

This module provides the log sink that receives one record per request,
and a JSON formatter for machine-readable log output. This is useful for
log aggregation systems like ELK, Splunk, or CloudWatch Logs.

The default sink writes records with Python's logging system on the
logger ``reqlog.<channel>``. Records carry their fields as ``extra``
attributes; the JSON formatter is opt-in.

Example:
    Write request records as JSON lines:

    ```python
    import logging
    from reqlog.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("reqlog")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    ```
"""

from __future__ import annotations

__all__ = [
    "LOG_LEVELS",
    "LogSink",
    "LoggingSink",
    "StructuredFormatter",
    "log_structured",
]

import json
import logging
import time
from typing import Any, Protocol

LOG_LEVELS: dict[str, int] = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Attributes set by logging.LogRecord itself, excluded from the extra fields
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
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
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


class LogSink(Protocol):
    """Receiver of request log records."""

    def log(self, channel: str, record: dict[str, Any]) -> None:
        """Write one request log record.

        Args:
            channel: The log channel, usually the plugin slug.
            record: The request log record.
        """


class LoggingSink:
    """Log sink writing records with Python's logging system.

    Each record is emitted on the logger ``<prefix>.<channel>`` at the
    level named by its ``log_level`` field, with every record field
    attached as an ``extra`` attribute.

    Args:
        prefix: The prefix of the logger names.

    Example:
        ```pycon
        >>> from reqlog.utils.structured_logging import LoggingSink
        >>> sink = LoggingSink()
        >>> sink.log(
        ...     "my_plugin",
        ...     {"type": "GET", "title": "Get order", "log_level": "info"},
        ... )

        ```
    """

    def __init__(self, prefix: str = "reqlog") -> None:
        self._prefix = prefix

    def get_logger(self, channel: str) -> logging.Logger:
        return logging.getLogger(f"{self._prefix}.{channel}")

    def log(self, channel: str, record: dict[str, Any]) -> None:
        level = LOG_LEVELS.get(record.get("log_level", "info"), logging.INFO)
        message = record.get("title") or f"{record.get('type')} request to {record.get('request_url')}"
        log_structured(self.get_logger(channel), level, message, **record)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records as JSON objects with consistent field
    names, and preserves any extra fields added to the log record.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - logger: Logger name
        - message: Log message
        - module: Module name where log originated
        - function: Function name where log originated
        - line: Line number where log originated

    Extra fields that clash with the standard ones (such as the request
    record's own ``timestamp``) overwrite them. Values that are not JSON
    serializable are rendered with ``str``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from reqlog.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_logger")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Test message", extra={"request_url": "https://api.example.com"})
        >>> output = stream.getvalue()
        >>> "Test message" in output
        True
        >>> "request_url" in output
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format timestamp as ISO 8601.

        Args:
            record: The log record.
            datefmt: Optional date format (ignored, always uses ISO 8601).

        Returns:
            ISO 8601 formatted timestamp.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    The extra fields will be included in JSON output when using
    StructuredFormatter.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **extra: Additional structured fields to include in the log.
    """
    logger.log(level, message, extra=extra)
