r"""Utility functions for request execution and logging.

This package provides helpers for parsing response bodies, computing the
user agent, capturing debug stacks and writing structured log records.
"""

from __future__ import annotations

__all__ = [
    "LogSink",
    "LoggingSink",
    "StructuredFormatter",
    "compute_user_agent",
    "get_stack",
    "log_structured",
    "parse_body",
    "xml_to_data",
]

from reqlog.utils.response import parse_body, xml_to_data
from reqlog.utils.stack import get_stack
from reqlog.utils.structured_logging import (
    LoggingSink,
    LogSink,
    StructuredFormatter,
    log_structured,
)
from reqlog.utils.user_agent import compute_user_agent
