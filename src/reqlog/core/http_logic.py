r"""Request assembly and response classification logic.

This module contains the invariant plumbing shared by every request
type: URL joining, default headers, status classification and the log
severity decision.
"""

from __future__ import annotations

__all__ = [
    "JSON_CONTENT_TYPE",
    "LOG_LEVEL_ERROR",
    "LOG_LEVEL_INFO",
    "LOG_LEVEL_WARNING",
    "build_headers",
    "build_url",
    "compute_log_level",
    "is_success",
]

from collections.abc import Mapping
from typing import Any

JSON_CONTENT_TYPE = "application/json"

LOG_LEVEL_ERROR = "error"
LOG_LEVEL_WARNING = "warning"
LOG_LEVEL_INFO = "info"


def build_url(base_url: str, endpoint: str) -> str:
    """Join a base URL and an endpoint path.

    The trailing slashes of the base URL and the leading slashes of the
    endpoint are stripped before both are joined with a single ``/``.
    Malformed URLs are not detected.

    Args:
        base_url: The API base URL.
        endpoint: The endpoint path.

    Returns:
        The request URL.

    Example:
        ```pycon
        >>> from reqlog.core.http_logic import build_url
        >>> build_url("https://example.com/", "/orders")
        'https://example.com/orders'
        >>> build_url("https://example.com", "orders")
        'https://example.com/orders'

        ```
    """
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def build_headers(authorization: str, user_agent: str | None = None) -> dict[str, str]:
    """Build the default request headers.

    Args:
        authorization: The ``Authorization`` header value.
        user_agent: The optional ``User-Agent`` header value.

    Returns:
        The default headers. A request type may override any of them.

    Example:
        ```pycon
        >>> from reqlog.core.http_logic import build_headers
        >>> build_headers("Bearer abc")
        {'Authorization': 'Bearer abc', 'Content-Type': 'application/json'}

        ```
    """
    headers = {"Authorization": authorization, "Content-Type": JSON_CONTENT_TYPE}
    if user_agent is not None:
        headers["User-Agent"] = user_agent
    return headers


def is_success(status_code: int | None) -> bool:
    """Indicate if a status code is in the success range [200, 299].

    Example:
        ```pycon
        >>> from reqlog.core.http_logic import is_success
        >>> is_success(204)
        True
        >>> is_success(301)
        False

        ```
    """
    return status_code is not None and 200 <= status_code <= 299


def compute_log_level(status_code: int | None, body: Any) -> str:
    """Decide the severity of a request log record.

    A status outside [200, 299] (or no status at all) is an error. A
    successful response whose body is a mapping with ``status`` equal
    to ``"warning"`` is a warning. Everything else is info.

    Args:
        status_code: The response status code, or ``None`` if no
            response was received.
        body: The parsed response body.

    Returns:
        ``"error"``, ``"warning"`` or ``"info"``.

    Example:
        ```pycon
        >>> from reqlog.core.http_logic import compute_log_level
        >>> compute_log_level(404, {})
        'error'
        >>> compute_log_level(200, {"status": "warning"})
        'warning'
        >>> compute_log_level(200, "plain text")
        'info'

        ```
    """
    if not is_success(status_code):
        return LOG_LEVEL_ERROR
    if isinstance(body, Mapping) and body.get("status") == "warning":
        return LOG_LEVEL_WARNING
    return LOG_LEVEL_INFO
