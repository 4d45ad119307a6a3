r"""HTTP transports performing the network I/O of a request.

A transport receives the request URL and descriptor, performs one
blocking call, and returns either the raw response or a
``TransportError`` value. It does not retry.
"""

from __future__ import annotations

__all__ = ["HttpxTransport", "Transport"]

import logging
from typing import TYPE_CHECKING, Protocol

import httpx

from reqlog.core.config import DEFAULT_TIMEOUT
from reqlog.core.validation import validate_timeout
from reqlog.exceptions import TransportError
from reqlog.models import RawResponse

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from reqlog.models import RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Performs the network I/O of one request."""

    def send(self, url: str, descriptor: RequestDescriptor) -> RawResponse | TransportError:
        """Send a request.

        Args:
            url: The request URL.
            descriptor: The request method, headers and body.

        Returns:
            The raw response, or a ``TransportError`` if no response was
            received.
        """


class HttpxTransport:
    r"""Transport backed by an ``httpx.Client``.

    If a client is passed in, its lifecycle stays with the caller and
    ``close`` leaves it open. Otherwise the transport creates a client
    with the given timeout and closes it on ``close`` or when leaving
    the ``with`` block.

    Args:
        client: Optional httpx.Client instance to use for requests.
        timeout: Maximum seconds to wait for the server response. Only
            used if client is None. Must be > 0.

    Example:
        ```pycon
        >>> from reqlog.models import RequestDescriptor
        >>> from reqlog.transport import HttpxTransport
        >>> with HttpxTransport() as transport:  # doctest: +SKIP
        ...     response = transport.send(
        ...         "https://api.example.com/orders", RequestDescriptor("orders")
        ...     )
        ...

        ```
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        validate_timeout(timeout)
        self._owns_client = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def send(self, url: str, descriptor: RequestDescriptor) -> RawResponse | TransportError:
        try:
            # Header values are sent as UTF-8 bytes, not restricted to ASCII
            response = self._client.request(
                descriptor.method,
                url,
                headers=httpx.Headers(descriptor.headers, encoding="utf-8"),
                content=descriptor.body,
            )
        except httpx.InvalidURL as exc:
            logger.debug(f"{descriptor.method} request to {url} has an invalid URL: {exc}")
            return TransportError("http_request_invalid_url", str(exc), cause=exc)
        except UnicodeEncodeError as exc:
            logger.debug(f"{descriptor.method} request to {url} could not be encoded: {exc}")
            return TransportError("http_request_invalid_request", str(exc), cause=exc)
        except httpx.TimeoutException as exc:
            logger.debug(f"{descriptor.method} request to {url} timed out: {exc}")
            return TransportError("http_request_timeout", str(exc) or "Request timed out", cause=exc)
        except httpx.RequestError as exc:
            logger.debug(
                f"{descriptor.method} request to {url} encountered {type(exc).__name__}: {exc}"
            )
            return TransportError(
                "http_request_failed", str(exc) or type(exc).__name__, cause=exc
            )
        return RawResponse.from_httpx(response)
