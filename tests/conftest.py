from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from reqlog import RequestConfig
from tests.helpers import TEST_BASE_URL, RecordingSink

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def config() -> RequestConfig:
    """Create a request config pointing at the test API."""
    return RequestConfig(slug="test_plugin", plugin_version="2.3.4", base_url=TEST_BASE_URL)


@pytest.fixture
def settings() -> dict[str, str]:
    """Create plugin settings holding an API key."""
    return {"api_key": "secret-key"}


@pytest.fixture
def sink() -> RecordingSink:
    """Create a log sink recording every request log record."""
    return RecordingSink()


@pytest.fixture
def mock_client() -> httpx.Client:
    """Create a mock httpx.Client for testing."""
    return Mock(spec=httpx.Client)


@pytest.fixture
def mock_transport_client() -> Generator[tuple[httpx.Client, list[httpx.Request]], None, None]:
    """Create an httpx.Client backed by ``httpx.MockTransport``.

    The handler answers ``200`` with an empty JSON object, and every
    request it sees is appended to the returned list.
    """
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        yield client, seen
