r"""reqlog - Authenticated API requests with structured request logging.

This package helps plugins running inside a host CMS build authenticated
requests to third-party APIs. A request type describes one API operation;
the executor joins it to the configured base URL, adds the default
headers and user agent, sends it with httpx, parses the response body
according to its content type and writes one structured log record per
request.

Key Features:
    - One abstract request type with three hooks: authorization, request
      arguments and error mapping
    - Response parsing for JSON, HTML, XML and plain bodies
    - Log records with a severity decision (error, warning, info), the
      request, the response and an optional debug stack
    - Errors returned as values (transport, HTTP and parse errors)
    - Immutable configuration with defaults and validation

Example:
    ```pycon
    >>> from reqlog import ApiRequest, HttpError, RequestConfig, RequestExecutor
    >>> class ListOrders(ApiRequest):
    ...     endpoint = "/orders"
    ...     log_title = "List orders"
    ...
    ...     def calculate_auth(self, settings):
    ...         return f"Bearer {settings['api_key']}"
    ...
    ...     def get_request_args(self, settings, arguments, headers):
    ...         return self.descriptor(headers)
    ...
    ...     def get_error_message(self, response):
    ...         return HttpError("api_error", response.text, status_code=response.status_code)
    ...
    >>> executor = RequestExecutor(
    ...     ListOrders(),
    ...     config=RequestConfig(slug="shop", base_url="https://api.example.com"),
    ...     settings={"api_key": "secret"},
    ... )
    >>> orders = executor.execute()  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiRequest",
    "HostEnvironment",
    "HttpError",
    "HttpxTransport",
    "JsonDecodeError",
    "LoggingSink",
    "ParseError",
    "RawResponse",
    "RequestConfig",
    "RequestDescriptor",
    "RequestError",
    "RequestExecutor",
    "TransportError",
    "XmlParseError",
    "__version__",
    "is_error",
]

from importlib.metadata import PackageNotFoundError, version

from reqlog.core.config import RequestConfig
from reqlog.exceptions import (
    HttpError,
    JsonDecodeError,
    ParseError,
    RequestError,
    TransportError,
    XmlParseError,
    is_error,
)
from reqlog.executor import RequestExecutor
from reqlog.models import HostEnvironment, RawResponse, RequestDescriptor
from reqlog.request import ApiRequest
from reqlog.transport import HttpxTransport
from reqlog.utils.structured_logging import LoggingSink

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
