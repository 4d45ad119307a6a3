r"""Core shared logic for request executors.

This module contains the configuration, validation and request assembly
logic shared by every request type.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_TIMEOUT",
    "RequestConfig",
    "build_headers",
    "build_url",
    "compute_log_level",
    "is_success",
    "validate_config_params",
    "validate_timeout",
]

from reqlog.core.config import DEFAULT_TIMEOUT, RequestConfig
from reqlog.core.http_logic import build_headers, build_url, compute_log_level, is_success
from reqlog.core.validation import validate_config_params, validate_timeout
