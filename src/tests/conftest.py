"""Pytest configuration for tests."""

import json
from typing import Any, List, Optional, Union

import httpx
import pytest
import pytest_asyncio


class MockProvider:
    """Provider endpoint stand-in that records every request it receives."""

    def __init__(self, status_code: int = 200, body: Union[bytes, str, dict, list, None] = None):
        self.status_code = status_code
        self.body = body
        self.requests: List[httpx.Request] = []
        self.error: Optional[Exception] = None
        self._client: Optional[httpx.AsyncClient] = None

    def reply(self, status_code: int = 200, body: Union[bytes, str, dict, list, None] = None):
        self.status_code = status_code
        self.body = body

    def _content(self) -> bytes:
        if self.body is None:
            return b""
        if isinstance(self.body, bytes):
            return self.body
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return json.dumps(self.body).encode("utf-8")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self._content())

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return self._client

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest_asyncio.fixture
async def mock_provider():
    """A provider endpoint returning 200 with an empty body until told otherwise."""
    provider = MockProvider()
    yield provider
    await provider.aclose()


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Clean up the global adapter registry between tests."""
    yield
    from provider_adapters.registry import adapter_registry
    adapter_registry.clear()
