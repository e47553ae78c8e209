from types import SimpleNamespace
from typing import Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from meme_relay.core.settings import Settings
from meme_relay.main import create_app

GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04\x01\x00\x00\x00\x00,\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


class FakeLLM:
    """Mimics openai.OpenAI().chat.completions.create closely enough for query_gen."""

    def __init__(self, content: Optional[str], total_tokens: Optional[int] = 42, error: Exception | None = None):
        self.content = content
        self.total_tokens = total_tokens
        self.error = error
        self.calls: List[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        usage = None if self.total_tokens is None else SimpleNamespace(total_tokens=self.total_tokens)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)


class Upstream:
    """Routes outbound requests to per-URL handlers and records every call."""

    def __init__(self):
        self.routes: Dict[tuple, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def on(self, method: str, url: str, handler):
        if isinstance(handler, httpx.Response):
            resp = handler
            handler = lambda request: resp  # noqa: E731
        self.routes[(method, url)] = handler
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = request.url
        key = (request.method, f"{url.scheme}://{url.host}{url.path}")
        handler = self.routes.get(key)
        if handler is None:
            return httpx.Response(599, text=f"no route for {key}")
        return handler(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self._handle))

    def calls(self, method: str) -> List[str]:
        return [str(r.url) for r in self.requests if r.method == method]


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


def _giphy_settings(**overrides) -> Settings:
    values = dict(meme_backend="giphy", giphy_api_key="giphy-key")
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _google_settings(**overrides) -> Settings:
    values = dict(
        meme_backend="google",
        google_api_key="g-key",
        google_cx="g-cx",
        openai_api_key="sk-test",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_client(upstream):
    def _make(settings: Settings, llm=None) -> TestClient:
        app = create_app(settings, http_client=upstream.client(), llm_client=llm)
        return TestClient(app)
    return _make


@pytest.fixture
def giphy_settings():
    return _giphy_settings


@pytest.fixture
def google_settings():
    return _google_settings


@pytest.fixture
def fake_llm():
    return FakeLLM


@pytest.fixture
def gif_bytes() -> bytes:
    return GIF_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES
