"""Shared fixtures: a fake Port.io API behind httpx.MockTransport and a fake clock."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest

from core.config import PortSettings
from core.gateway import PortClient

API_URL = "https://api.test.getport.io"
TOKEN_PATH = "/v1/auth/access_token"


class FakeClock:
    """Manually advanced stand-in for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePortAPI:
    """Records every request and answers from a per-path route table.

    Routes are keyed on the URL path without the query string.  Unknown
    paths answer 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, tuple[int, Any]] = {}
        self.token_response: tuple[int, Any] = (200, {"accessToken": "token-1"})
        self.fail_with: Exception | None = None

    def route(self, path: str, payload: Any, status: int = 200) -> None:
        self.routes[path] = (status, payload)

    @property
    def auth_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == TOKEN_PATH]

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != TOKEN_PATH]

    @property
    def last_target(self) -> str:
        """Path plus query of the most recent catalog request."""
        return self.api_requests[-1].url.raw_path.decode()

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == TOKEN_PATH:
            status, payload = self.token_response
            return httpx.Response(status, json=payload)
        if self.fail_with is not None:
            raise self.fail_with
        status, payload = self.routes.get(request.url.path, (404, {"ok": False, "error": "not_found"}))
        return httpx.Response(status, json=payload)


def json_body(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> PortSettings:
    return PortSettings(client_id="client-id", client_secret="client-secret", api_url=API_URL)


@pytest.fixture
def fake_api() -> FakePortAPI:
    return FakePortAPI()


@pytest.fixture
async def http(fake_api: FakePortAPI) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler)) as client:
        yield client


@pytest.fixture
def port(settings: PortSettings, http: httpx.AsyncClient, clock: FakeClock) -> PortClient:
    return PortClient(settings, http=http, clock=clock)
