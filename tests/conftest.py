"""Shared fixtures for USPS MCP tests.

Provides:
- A fake clock/sleep pair so throttle tests never wait on wall time
- A UspsClient factory backed by httpx.MockTransport
- A mock FastMCP context whose lifespan holds the client
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from usps_mcp.client import UspsClient
from usps_mcp.config import UspsSettings
from usps_mcp.throttle import RequestThrottle

TEST_BASE_URL = "https://usps.test/ShippingAPI.dll"


class FakeClock:
    """Monotonic clock that only moves when sleep() is awaited."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def user_id(monkeypatch):
    """Set a USPS_USER_ID for the duration of the test."""
    monkeypatch.setenv("USPS_USER_ID", "TESTUSER123")
    return "TESTUSER123"


@pytest.fixture
def make_client():
    """Factory for a UspsClient that answers every request with a handler.

    The handler receives the httpx.Request; every request seen is also
    appended to ``client.requests`` for inspection.
    """
    def _make(handler, throttle: RequestThrottle | None = None) -> UspsClient:
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = UspsClient(
            UspsSettings(base_url=TEST_BASE_URL),
            throttle=throttle or RequestThrottle(min_interval=0),
            transport=httpx.MockTransport(_record),
        )
        client.requests = requests
        return client

    return _make


@pytest.fixture
def respond_with(make_client):
    """Client that returns the given XML body with status 200."""

    def _respond(body: str, status_code: int = 200) -> UspsClient:
        return make_client(lambda request: httpx.Response(status_code, text=body))

    return _respond


@pytest.fixture
def mock_ctx():
    """Create mock FastMCP context with an empty lifespan context."""
    ctx = MagicMock()
    ctx.info = AsyncMock()
    ctx.request_context.lifespan_context = {}
    return ctx
