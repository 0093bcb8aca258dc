# ===============================================
# Shared fakes: an HTTP response/post pair that stands in for
# requests, and a TestClient factory wired to them.
# ===============================================

from typing import Any, Dict, Iterable, List, Optional

import pytest
from fastapi.testclient import TestClient

from salon_ai.app import app, get_gateway, get_settings, get_store
from salon_ai.generate import GatewayClient
from salon_ai.settings import Settings
from salon_ai.store import SalonStore


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        text: str = "",
        chunks: Optional[Iterable[bytes]] = None,
    ):
        self.status_code = status_code
        self._json = json_body
        self.text = text
        self._chunks = list(chunks or [])
        self.closed = False

    def json(self):
        if self._json is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json

    def iter_content(self, chunk_size=None):
        for c in self._chunks:
            yield c

    def close(self):
        self.closed = True


class FakePost:
    """Records every call; returns a canned response or raises."""

    def __init__(self, response: Optional[FakeResponse] = None, exc: Optional[Exception] = None):
        self.response = response or FakeResponse(json_body={"choices": [{"message": {"content": "ok"}}]})
        self.exc = exc
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return self.response


def completion(content: str) -> FakeResponse:
    return FakeResponse(json_body={"choices": [{"message": {"content": content}}]})


@pytest.fixture
def fake_post():
    return FakePost()


@pytest.fixture
def make_client(tmp_path):
    """Build a TestClient whose gateway uses `post` and whose settings are `overrides`."""

    def _make(post: FakePost, api_key: Optional[str] = "test-key", **overrides) -> TestClient:
        cfg = Settings(
            AI_GATEWAY_API_KEY=api_key,
            DB_PATH=str(tmp_path / "salon.db"),
            **overrides,
        )
        app.dependency_overrides[get_settings] = lambda: cfg
        app.dependency_overrides[get_gateway] = lambda: GatewayClient(
            api_key=api_key,
            url=cfg.AI_GATEWAY_URL,
            model=cfg.AI_MODEL,
            http_post=post,
        )
        app.dependency_overrides[get_store] = lambda: SalonStore(cfg.DB_PATH)
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
