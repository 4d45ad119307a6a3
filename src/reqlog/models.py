r"""Data structures exchanged between request types, executors and
transports."""

from __future__ import annotations

__all__ = ["HostEnvironment", "RawResponse", "RequestDescriptor"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass
class RequestDescriptor:
    """The fully assembled request handed to the transport.

    Attributes:
        endpoint: The endpoint path joined to the configured base URL.
        method: The HTTP method (e.g., "GET", "POST").
        headers: The request headers.
        body: The optional request body.
    """

    endpoint: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "method": self.method,
            "headers": dict(self.headers),
            "body": self.body,
        }


@dataclass
class RawResponse:
    """An HTTP response as returned by a transport.

    Attributes:
        status_code: The HTTP status code.
        headers: The response headers. Lookups through ``header`` are
            case-insensitive.
        body: The raw response body.

    Example:
        ```pycon
        >>> from reqlog.models import RawResponse
        >>> response = RawResponse(200, {"Content-Type": "text/html"}, b"<p>hi</p>")
        >>> response.header("content-type")
        'text/html'
        >>> response.text
        '<p>hi</p>'

        ```
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str, default: str = "") -> str:
        """Return a response header value, ignoring the name's case."""
        return httpx.Headers(self.headers).get(name, default)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> RawResponse:
        """Create a raw response from an ``httpx.Response``."""
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )


@dataclass(frozen=True)
class HostEnvironment:
    """What the hosting platform reports about itself.

    Attributes:
        platform_version: The version of the host platform.
        site_url: The URL of the site the plugin runs on.
        platform_name: The name of the host platform.
        commerce_version: The version of the commerce plugin, if one is
            installed.
        commerce_name: The name of the commerce plugin.
        vendor: An optional vendor name appended to the user agent.
    """

    platform_version: str = ""
    site_url: str = ""
    platform_name: str = "WordPress"
    commerce_version: str | None = None
    commerce_name: str = "WooCommerce"
    vendor: str | None = None
