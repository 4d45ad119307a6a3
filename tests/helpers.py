r"""Shared test helpers for request executor tests.

This module contains common test infrastructure used across multiple
test files to reduce duplication and improve maintainability.
"""

from __future__ import annotations

__all__ = [
    "TEST_BASE_URL",
    "CreateOrder",
    "GetOrder",
    "RecordingSink",
    "create_raw_response",
    "create_transport",
]

import json
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

from reqlog import ApiRequest, HttpError, RawResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

TEST_BASE_URL = "https://api.example.com/v1/"


class GetOrder(ApiRequest):
    """GET request for one order, authorized with a bearer token."""

    method = "GET"
    log_title = "Get order"

    def __init__(self, order_id: int = 1) -> None:
        self.endpoint = f"/orders/{order_id}"

    def calculate_auth(self, settings: Mapping[str, Any]) -> str:
        return f"Bearer {settings.get('api_key', '')}"

    def get_request_args(
        self, settings: Mapping[str, Any], arguments: Mapping[str, Any], headers: dict[str, str]
    ) -> Any:
        return self.descriptor(headers)

    def get_error_message(self, response: RawResponse) -> HttpError:
        try:
            data = json.loads(response.body)
        except ValueError:
            data = {}
        return HttpError(
            data.get("code", "api_error"),
            data.get("message", f"Request failed with status {response.status_code}"),
            status_code=response.status_code,
            response=response,
        )


class CreateOrder(GetOrder):
    """POST request creating an order from the call arguments."""

    method = "POST"
    log_title = "Create order"

    def __init__(self) -> None:
        self.endpoint = "orders"

    def get_request_args(
        self, settings: Mapping[str, Any], arguments: Mapping[str, Any], headers: dict[str, str]
    ) -> Any:
        return self.descriptor({**headers, "X-Store": "main"}, body=dict(arguments))


class RecordingSink:
    """Log sink keeping every record it receives."""

    def __init__(self) -> None:
        self.records: list[tuple[str, dict[str, Any]]] = []

    def log(self, channel: str, record: dict[str, Any]) -> None:
        self.records.append((channel, record))


def create_raw_response(
    status_code: int = 200,
    body: bytes | str = b"",
    content_type: str | None = "application/json",
) -> RawResponse:
    """Create a raw response for testing.

    Args:
        status_code: The HTTP status code.
        body: The response body. Strings are UTF-8 encoded.
        content_type: The ``Content-Type`` header value. If ``None``,
            the header is omitted.

    Returns:
        The raw response.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    headers = {} if content_type is None else {"Content-Type": content_type}
    return RawResponse(status_code=status_code, headers=headers, body=body)


def create_transport(result: Any) -> Mock:
    """Create a mock transport whose ``send`` returns ``result``."""
    return Mock(send=Mock(return_value=result))
