import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

import meme_relay.__main__ as entry
from meme_relay.core.settings import Settings, get_settings
from meme_relay.main import create_app

ENV_KEYS = ("MEME_BACKEND", "GIPHY_API_KEY", "GOOGLE_API_KEY", "GOOGLE_CX", "OPENAI_API_KEY", "PORT")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_google_backend_requires_all_three_keys(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "k")
    with pytest.raises(ValidationError) as exc:
        Settings(_env_file=None)
    assert "GOOGLE_CX" in str(exc.value)
    assert "OPENAI_API_KEY" in str(exc.value)


def test_giphy_backend_needs_only_giphy_key(monkeypatch):
    monkeypatch.setenv("MEME_BACKEND", "giphy")
    monkeypatch.setenv("GIPHY_API_KEY", "k")
    s = Settings(_env_file=None)
    assert s.port == 8080
    assert s.giphy_enabled and not s.refined_enabled


def test_port_from_env(monkeypatch):
    monkeypatch.setenv("MEME_BACKEND", "giphy")
    monkeypatch.setenv("GIPHY_API_KEY", "k")
    monkeypatch.setenv("PORT", "9090")
    assert Settings(_env_file=None).port == 9090


def test_settings_are_immutable(giphy_settings):
    s = giphy_settings()
    with pytest.raises(ValidationError):
        s.giphy_api_key = "other"


def test_entry_point_exits_non_zero_without_keys(monkeypatch):
    monkeypatch.setattr(entry, "get_settings", lambda: Settings(_env_file=None))
    ran = []
    monkeypatch.setattr(entry.uvicorn, "run", lambda *a, **kw: ran.append(a))

    with pytest.raises(SystemExit) as exc:
        entry.main()

    assert exc.value.code == 1
    assert ran == []


def test_health_is_plain_ok(make_client, giphy_settings):
    client = make_client(giphy_settings())
    r = client.get("/health")
    assert r.status_code == 200
    assert r.text == "OK"


def test_healthz_reports_backend_without_leaking_keys(make_client, giphy_settings):
    client = make_client(giphy_settings(giphy_api_key="super-secret"))
    r = client.get("/healthz")
    body = r.json()
    assert r.status_code == 200
    assert body["backend"] == "giphy"
    assert body["env_keys_present"]["GIPHY_API_KEY"] is True
    assert body["routes"] == {"giphy": True, "refined": False}
    assert "super-secret" not in r.text


def test_refined_route_absent_without_google_keys(upstream, giphy_settings):
    app = create_app(giphy_settings(), http_client=upstream.client())
    client = TestClient(app)
    r = client.post("/find_meme/refined", json={"text": "x"})
    assert r.status_code in (404, 405)


def test_default_llm_client_does_not_retry(upstream, google_settings):
    app = create_app(google_settings(llm_timeout=12.0), http_client=upstream.client())

    llm = app.state.llm_client
    assert llm.max_retries == 0
    assert llm.timeout == 12.0
