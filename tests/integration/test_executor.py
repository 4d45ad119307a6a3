r"""Integration tests running requests end to end through
HttpxTransport, with httpx.MockTransport standing in for the API."""

from __future__ import annotations

import json
import logging
from io import StringIO

import httpx
import pytest

from reqlog import (
    HostEnvironment,
    HttpError,
    HttpxTransport,
    RequestConfig,
    RequestExecutor,
    TransportError,
)
from reqlog.utils import StructuredFormatter
from tests.helpers import CreateOrder, GetOrder, RecordingSink


def api_handler(request: httpx.Request) -> httpx.Response:
    if request.headers.get("authorization") != "Bearer secret-key":
        return httpx.Response(401, json={"code": "unauthorized", "message": "Invalid API key"})
    if request.url.path == "/v1/orders/1":
        return httpx.Response(200, json={"id": 1, "status": "ok"})
    if request.url.path == "/v1/orders/2":
        return httpx.Response(200, json={"id": 2, "status": "warning"})
    if request.url.path == "/v1/orders/3":
        return httpx.Response(
            200, content=b"<order><id>3</id></order>", headers={"Content-Type": "text/xml"}
        )
    if request.url.path == "/v1/orders" and request.method == "POST":
        return httpx.Response(201, json={"id": 10, **json.loads(request.content)})
    return httpx.Response(404, json={"code": "not_found", "message": "Order not found"})


@pytest.fixture
def transport() -> HttpxTransport:
    with httpx.Client(transport=httpx.MockTransport(api_handler)) as client:
        yield HttpxTransport(client)


def create_executor(
    request: object, config: RequestConfig, transport: HttpxTransport, sink: RecordingSink, **kwargs: object
) -> RequestExecutor:
    return RequestExecutor(
        request,
        config=config,
        settings=kwargs.pop("settings", {"api_key": "secret-key"}),
        transport=transport,
        sink=sink,
        **kwargs,
    )


def test_get_order(config: RequestConfig, transport: HttpxTransport, sink: RecordingSink) -> None:
    """Test a successful GET request."""
    executor = create_executor(GetOrder(1), config, transport, sink)

    assert executor.execute() == {"id": 1, "status": "ok"}
    assert sink.records[0][1]["log_level"] == "info"
    assert sink.records[0][1]["request_url"] == "https://api.example.com/v1/orders/1"


def test_get_order_warning(
    config: RequestConfig, transport: HttpxTransport, sink: RecordingSink
) -> None:
    """Test that a warning status in the body raises the log level."""
    executor = create_executor(GetOrder(2), config, transport, sink)

    assert executor.execute() == {"id": 2, "status": "warning"}
    assert sink.records[0][1]["log_level"] == "warning"


def test_get_order_xml(config: RequestConfig, transport: HttpxTransport, sink: RecordingSink) -> None:
    """Test that an XML response is normalized."""
    executor = create_executor(GetOrder(3), config, transport, sink)

    assert executor.execute() == {"id": "3"}


def test_get_order_not_found(
    config: RequestConfig, transport: HttpxTransport, sink: RecordingSink
) -> None:
    """Test that a 404 response returns an HttpError and logs an
    error."""
    executor = create_executor(GetOrder(99), config, transport, sink)

    error = executor.execute()

    assert isinstance(error, HttpError)
    assert error.code == "not_found"
    assert error.status_code == 404
    assert sink.records[0][1]["log_level"] == "error"
    assert sink.records[0][1]["response"]["code"] == 404


def test_unauthorized(config: RequestConfig, transport: HttpxTransport, sink: RecordingSink) -> None:
    """Test that the authorization is computed from the settings."""
    executor = create_executor(GetOrder(1), config, transport, sink, settings={"api_key": "wrong"})

    error = executor.execute()

    assert isinstance(error, HttpError)
    assert error.code == "unauthorized"
    assert error.message == "Invalid API key"


def test_create_order(config: RequestConfig, transport: HttpxTransport, sink: RecordingSink) -> None:
    """Test a POST request with a JSON body."""
    executor = create_executor(CreateOrder(), config, transport, sink)

    assert executor.execute({"sku": "A-1"}) == {"id": 10, "sku": "A-1"}
    record = sink.records[0][1]
    assert record["type"] == "POST"
    assert record["request"]["body"] == {"sku": "A-1"}
    assert record["response"] == {"body": {"id": 10, "sku": "A-1"}, "code": 201}


def test_user_agent_sent(config: RequestConfig, sink: RecordingSink) -> None:
    """Test that the user agent reaches the server."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["user-agent"])
        return httpx.Response(200, json={})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        executor = create_executor(
            GetOrder(1),
            config,
            HttpxTransport(client),
            sink,
            environment=HostEnvironment("6.4", "https://shop.example.com", commerce_version="8.5"),
        )
        executor.execute()

    assert seen[0].startswith("WordPress/6.4; https://shop.example.com - WooCommerce: 8.5 - KAPI: 2.3.4")


def test_connection_refused(config: RequestConfig, sink: RecordingSink) -> None:
    """Test that a connection failure is returned and logged once."""

    def handler(request: httpx.Request) -> httpx.Response:
        msg = "[Errno 111] Connection refused"
        raise httpx.ConnectError(msg, request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        executor = create_executor(GetOrder(1), config, HttpxTransport(client), sink)
        error = executor.execute()

    assert isinstance(error, TransportError)
    assert error.message == "[Errno 111] Connection refused"
    assert len(sink.records) == 1
    assert sink.records[0][1]["response"] == {"body": {}, "code": None}


def test_json_log_output(config: RequestConfig, transport: HttpxTransport) -> None:
    """Test the default sink with the JSON formatter."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("reqlog.test_plugin")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    try:
        executor = RequestExecutor(
            GetOrder(1), config=config, settings={"api_key": "secret-key"}, transport=transport
        )
        executor.execute({"order_id": 1})

        log_data = json.loads(stream.getvalue().strip())
        assert log_data["message"] == "Get order"
        assert log_data["level"] == "INFO"
        assert log_data["arguments"] == {"order_id": 1}
        assert log_data["response"] == {"body": {"id": 1, "status": "ok"}, "code": 200}
        assert log_data["plugin_version"] == "2.3.4"
    finally:
        logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
