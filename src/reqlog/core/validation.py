r"""Parameter validation utilities for request configuration.

This module provides validation functions for configuration parameters
to ensure they meet the required constraints before a request executor
uses them.
"""

from __future__ import annotations

__all__ = ["validate_config_params", "validate_timeout"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from reqlog.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(30)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def _validate_non_empty_str(name: str, value: Any) -> None:
    if not isinstance(value, str):
        msg = f"{name} must be a str, got {type(value).__name__}"
        raise TypeError(msg)
    if not value:
        msg = f"{name} must be a non-empty string"
        raise ValueError(msg)


def validate_config_params(
    slug: str,
    plugin_version: str,
    plugin_short_name: str,
    logging_enabled: bool,
    extended_debugging: bool,
    content_format: str,
) -> None:
    """Validate request configuration parameters.

    The base URL is deliberately not validated here: a missing or
    malformed base URL is the caller's responsibility.

    Args:
        slug: The log channel name. Must be a non-empty string.
        plugin_version: The plugin version. Must be a non-empty string.
        plugin_short_name: The short name used in the user agent.
            Must be a non-empty string.
        logging_enabled: Whether request logging is enabled. Must be a bool.
        extended_debugging: Whether log stacks include argument values.
            Must be a bool.
        content_format: The request content format. Must be a non-empty
            string.

    Raises:
        TypeError: If a parameter has the wrong type.
        ValueError: If a string parameter is empty.

    Example:
        ```pycon
        >>> from reqlog.core.validation import validate_config_params
        >>> validate_config_params(
        ...     slug="my_plugin",
        ...     plugin_version="1.2.0",
        ...     plugin_short_name="MP",
        ...     logging_enabled=True,
        ...     extended_debugging=False,
        ...     content_format="json",
        ... )

        ```
    """
    _validate_non_empty_str("slug", slug)
    _validate_non_empty_str("plugin_version", plugin_version)
    _validate_non_empty_str("plugin_short_name", plugin_short_name)
    _validate_non_empty_str("content_format", content_format)
    if not isinstance(logging_enabled, bool):
        msg = f"logging_enabled must be a bool, got {type(logging_enabled).__name__}"
        raise TypeError(msg)
    if not isinstance(extended_debugging, bool):
        msg = f"extended_debugging must be a bool, got {type(extended_debugging).__name__}"
        raise TypeError(msg)
