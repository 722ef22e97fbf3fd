from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.araria_client import ArariaClient
from core.config import ClientConfig
from core.interfaces.hooks import RequestHooks


class Recorder:
    """Mock transport handler that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {"ok": True}
        self.text_body: str | None = None
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        if self.json_body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_client(recorder: Recorder) -> Callable[..., ArariaClient]:
    def _make(*, hooks: RequestHooks | None = None, **overrides: Any) -> ArariaClient:
        values: dict[str, Any] = {"api_key": "abc123", "base_url": "https://x.test/"}
        values.update(overrides)
        return ArariaClient(
            ClientConfig(**values),
            hooks=hooks,
            transport=httpx.MockTransport(recorder),
        )

    return _make
