from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from apex_mcp.apex.client import ApexClient
from apex_mcp.config import Credentials
from apex_mcp.tools.registry import ToolRegistry


API_URL = "https://api.test"
TOKEN = "token-123"


class RecordingHandler:
    """httpx.MockTransport handler that records every request"""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder or (lambda request: httpx.Response(200, json={"ok": True}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def credentials() -> Credentials:
    return Credentials.create(TOKEN, API_URL)


@pytest.fixture
def make_registry(credentials: Credentials) -> Callable[..., ToolRegistry]:
    def factory(handler: Callable[[httpx.Request], httpx.Response], **options) -> ToolRegistry:
        client = ApexClient(credentials, transport=httpx.MockTransport(handler))
        return ToolRegistry(credentials, client=client, **options)

    return factory
