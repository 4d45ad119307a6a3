r"""Capability interface implemented by every concrete API request."""

from __future__ import annotations

__all__ = ["ApiRequest"]

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from reqlog.models import RequestDescriptor

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reqlog.exceptions import HttpError
    from reqlog.models import RawResponse


class ApiRequest(ABC):
    """Abstract base class for API requests.

    A request type describes one API operation. It supplies the endpoint,
    the authorization value, the request method/headers/body and the
    mapping of API error responses, while ``RequestExecutor`` supplies
    the URL joining, default headers, dispatch, parsing and logging.

    Subclasses set the ``endpoint``, ``method`` and ``log_title`` class
    attributes (or instance attributes) and implement the three abstract
    methods.

    Example:
        ```pycon
        >>> from reqlog import ApiRequest, HttpError
        >>> class GetOrder(ApiRequest):
        ...     method = "GET"
        ...     log_title = "Get order"
        ...
        ...     def __init__(self, order_id):
        ...         self.endpoint = f"/orders/{order_id}"
        ...
        ...     def calculate_auth(self, settings):
        ...         return f"Bearer {settings['api_key']}"
        ...
        ...     def get_request_args(self, settings, arguments, headers):
        ...         return self.descriptor(headers)
        ...
        ...     def get_error_message(self, response):
        ...         return HttpError("order_error", response.text, status_code=response.status_code)
        ...
        >>> GetOrder(7).descriptor({}).endpoint
        '/orders/7'

        ```
    """

    endpoint: str = ""
    method: str = "GET"
    log_title: str = ""

    @abstractmethod
    def calculate_auth(self, settings: Mapping[str, Any]) -> str:
        """Calculate the ``Authorization`` header value.

        Args:
            settings: The plugin settings.

        Returns:
            The authorization value.
        """

    @abstractmethod
    def get_request_args(
        self,
        settings: Mapping[str, Any],
        arguments: Mapping[str, Any],
        headers: dict[str, str],
    ) -> RequestDescriptor:
        """Build the request descriptor.

        Args:
            settings: The plugin settings.
            arguments: The arguments of this call.
            headers: The default headers. They may be modified or
                replaced.

        Returns:
            The request descriptor.
        """

    @abstractmethod
    def get_error_message(self, response: RawResponse) -> HttpError:
        """Map a response with a status outside [200, 299] to an error.

        Args:
            response: The raw response.

        Returns:
            The error value returned to the caller.
        """

    def descriptor(self, headers: dict[str, str], body: Any = None) -> RequestDescriptor:
        """Create a descriptor from the request's endpoint and method.

        Args:
            headers: The request headers.
            body: The optional request body. Anything other than
                ``str``, ``bytes`` or ``None`` is serialized to JSON.

        Returns:
            The request descriptor.
        """
        if body is not None and not isinstance(body, (str, bytes)):
            body = self.json_body(body)
        return RequestDescriptor(
            endpoint=self.endpoint, method=self.method, headers=headers, body=body
        )

    @staticmethod
    def json_body(data: Any) -> str:
        return json.dumps(data)
