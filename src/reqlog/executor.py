r"""Request executor: builds, sends, parses and logs API requests."""

from __future__ import annotations

__all__ = ["RequestExecutor"]

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from reqlog.core.config import RequestConfig
from reqlog.core.http_logic import build_headers, build_url, compute_log_level, is_success
from reqlog.exceptions import RequestError, TransportError
from reqlog.transport import HttpxTransport
from reqlog.utils.response import parse_body
from reqlog.utils.stack import get_stack
from reqlog.utils.structured_logging import LoggingSink
from reqlog.utils.user_agent import compute_user_agent

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    from reqlog.models import HostEnvironment, RawResponse, RequestDescriptor
    from reqlog.request import ApiRequest
    from reqlog.transport import Transport
    from reqlog.utils.structured_logging import LogSink

logger: logging.Logger = logging.getLogger(__name__)


class RequestExecutor:
    r"""Execute an ``ApiRequest`` and log its outcome.

    One call to ``execute`` builds the URL and headers, sends the request
    through the transport, parses the response body according to its
    content type, writes one log record and returns the outcome:

    - the parsed body if the status is in [200, 299];
    - a ``JsonDecodeError``/``XmlParseError`` if that body is malformed;
    - the ``HttpError`` built by the request type for any other status;
    - the transport's ``TransportError``, unmodified, if no response was
      received.

    Errors are returned, not raised. The executor keeps no per-call
    state, so one instance can serve any number of calls.

    Args:
        request: The request type to execute.
        config: The request configuration. If ``None``, the default
            configuration is used.
        settings: The plugin settings, passed through to the request
            type unmodified.
        transport: The transport used to send requests. If ``None``, an
            ``HttpxTransport`` with a default client is created. It is
            closed by ``close`` or when leaving the ``with`` block.
        sink: The log sink receiving the request records. If ``None``,
            records are written with Python's logging system.
        environment: What the host platform reports about itself, used
            in the user agent.
        user_agent_filter: Optional function rewriting the user agent
            before it is sent.

    Example:
        ```pycon
        >>> from reqlog import RequestConfig, RequestExecutor
        >>> executor = RequestExecutor(
        ...     GetOrder(7),
        ...     config=RequestConfig(slug="shop", base_url="https://api.example.com"),
        ...     settings={"api_key": "secret"},
        ... )  # doctest: +SKIP
        >>> order = executor.execute({"order_id": 7})  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        request: ApiRequest,
        *,
        config: RequestConfig | None = None,
        settings: Mapping[str, Any] | None = None,
        transport: Transport | None = None,
        sink: LogSink | None = None,
        environment: HostEnvironment | None = None,
        user_agent_filter: Callable[[str], str] | None = None,
    ) -> None:
        self._request = request
        self._config: RequestConfig = config or RequestConfig()
        self._settings: Mapping[str, Any] = settings if settings is not None else {}
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport()
        self._sink: LogSink = sink or LoggingSink()
        self._environment = environment
        self._user_agent_filter = user_agent_filter

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def config(self) -> RequestConfig:
        return self._config

    def close(self) -> None:
        """Close the transport if this executor created it.

        A transport passed to the constructor stays open; its lifecycle
        belongs to the caller.
        """
        if self._owns_transport:
            self._transport.close()

    def execute(self, arguments: Mapping[str, Any] | None = None) -> Any:
        """Execute the request.

        Args:
            arguments: The arguments of this call. They are passed to the
                request type and echoed into the log record.

        Returns:
            The parsed response body, or an error value.
        """
        arguments = arguments if arguments is not None else {}
        headers = build_headers(
            self._request.calculate_auth(self._settings), self.get_user_agent()
        )
        descriptor = self._request.get_request_args(self._settings, arguments, headers)
        url = self.get_request_url(descriptor.endpoint)
        response = self.dispatch(url, descriptor)
        return self.process_response(response, descriptor, url, arguments)

    def get_request_url(self, endpoint: str | None = None) -> str:
        """Return the request URL for an endpoint.

        Args:
            endpoint: The endpoint path. If ``None``, the request type's
                endpoint is used.
        """
        if endpoint is None:
            endpoint = self._request.endpoint
        return build_url(self._config.base_url or "", endpoint)

    def get_user_agent(self) -> str:
        return compute_user_agent(self._config, self._environment, self._user_agent_filter)

    def dispatch(self, url: str, descriptor: RequestDescriptor) -> RawResponse | TransportError:
        """Send the request through the transport with a single call."""
        logger.debug(f"Sending {descriptor.method} request to {url}")
        return self._transport.send(url, descriptor)

    def process_response(
        self,
        response: RawResponse | TransportError,
        descriptor: RequestDescriptor,
        url: str,
        arguments: Mapping[str, Any],
    ) -> Any:
        """Classify and parse a response, log it, and return the outcome.

        Args:
            response: The transport's result.
            descriptor: The request descriptor that was sent.
            url: The request URL.
            arguments: The arguments of this call.

        Returns:
            The parsed response body, or an error value.
        """
        if isinstance(response, TransportError):
            self.log_outcome(response, descriptor, url, arguments)
            return response

        if is_success(response.status_code):
            result = self.get_response_body(response)
            self.log_outcome(response, descriptor, url, arguments, body=result)
        else:
            logger.debug(
                f"{descriptor.method} request to {url} failed with status {response.status_code}"
            )
            result = self._request.get_error_message(response)
            self.log_outcome(response, descriptor, url, arguments)
        return result

    def get_response_body(self, response: RawResponse) -> Any:
        """Parse a response body according to its content type."""
        return parse_body(response)

    def log_outcome(
        self,
        response: RawResponse | TransportError,
        descriptor: RequestDescriptor,
        url: str,
        arguments: Mapping[str, Any],
        *,
        body: Any = None,
    ) -> None:
        """Write the log record of one request.

        Nothing is written if logging is disabled. A failure while
        building or writing the record is reported on this module's
        logger and never propagates to the caller.

        Args:
            response: The transport's result.
            descriptor: The request descriptor that was sent.
            url: The request URL.
            arguments: The arguments of this call.
            body: The already parsed response body, if any.
        """
        if not self._config.logging_enabled:
            return
        try:
            record = self.build_log_record(response, descriptor, url, arguments, body=body)
            self._sink.log(self._config.slug, record)
        except Exception:  # noqa: BLE001
            logger.warning(
                f"Failed to log {descriptor.method} request to {url}", exc_info=True
            )

    def build_log_record(
        self,
        response: RawResponse | TransportError,
        descriptor: RequestDescriptor,
        url: str,
        arguments: Mapping[str, Any],
        *,
        body: Any = None,
    ) -> dict[str, Any]:
        """Build the log record of one request.

        Args:
            response: The transport's result.
            descriptor: The request descriptor that was sent.
            url: The request URL.
            arguments: The arguments of this call.
            body: The already parsed response body, if any.

        Returns:
            The log record.
        """
        if isinstance(response, TransportError):
            response_body: Any = {}
            code = None
        else:
            response_body = body if body is not None else self.get_response_body(response)
            code = response.status_code
        log_level = compute_log_level(code, response_body)
        if isinstance(response_body, RequestError):
            response_body = response_body.to_dict()

        return {
            "type": descriptor.method,
            "title": self._request.log_title,
            "arguments": arguments,
            "request": _request_for_log(descriptor),
            "request_url": url,
            "response": {"body": response_body, "code": code},
            "log_level": log_level,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "stack": get_stack(self._config.extended_debugging),
            "plugin_version": self._config.plugin_version,
        }


def _request_for_log(descriptor: RequestDescriptor) -> dict[str, Any]:
    request = descriptor.to_dict()
    body = request["body"]
    if body:
        try:
            request["body"] = json.loads(body)
        except ValueError:
            if isinstance(body, bytes):
                request["body"] = body.decode("utf-8", errors="replace")
    return request
