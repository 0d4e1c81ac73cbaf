from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from apinet.core.config import ClientConfig

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://api.example.com"


@pytest.fixture
def config() -> ClientConfig:
    """Create a ClientConfig pointing at the test API."""
    return ClientConfig(base_url=BASE_URL)


@pytest.fixture
def mock_indicator() -> Mock:
    """Create a mock busy indicator recording begin/end calls."""
    return Mock(spec=["begin_busy", "end_busy"])


@pytest.fixture
def mock_alerts() -> Mock:
    """Create a mock alert surface."""
    return Mock(spec=["show_failure"])


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Collect the requests seen by the mock transport."""
    return []


@pytest.fixture
def make_transport(
    recorded_requests: list[httpx.Request],
) -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.MockTransport]:
    """Create an httpx.MockTransport that records every request before
    calling the handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
        def record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        return httpx.MockTransport(record)

    return factory
