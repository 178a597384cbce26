import asyncio

import httpx
import pytest

from core import api_client
from core.config import settings


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.base_url,
        transport=httpx.MockTransport(handler),
    )


class Upstream:
    """Canned Instant-System API that records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._reply = lambda request: httpx.Response(200, json={})

    def reply(self, status: int = 200, json=None, text: str = None) -> None:
        if text is not None:
            self._reply = lambda request: httpx.Response(status, text=text)
        else:
            self._reply = lambda request: httpx.Response(status, json=json)

    def fail(self, exc_type=httpx.ConnectError, message: str = "Connection refused") -> None:
        def raise_error(request):
            raise exc_type(message, request=request)

        self._reply = raise_error

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._reply(request)

    def client(self) -> httpx.AsyncClient:
        return mock_client(self.handle)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def call(self, adapter, **kwargs):
        """Run an async adapter against this upstream and return its ToolResponse."""

        async def go():
            async with self.client() as client:
                return await adapter(client=client, **kwargs)

        return asyncio.run(go())


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def patched_upstream(monkeypatch, upstream):
    """Route adapters that open their own client to the canned upstream."""
    monkeypatch.setattr(api_client, "build_client", lambda *args, **kwargs: mock_client(upstream.handle))
    return upstream
