"""Tests for the HTTP API, with the library and model swapped for fakes."""

import pytest
from fastapi.testclient import TestClient

from weathercal import routes
from weathercal.layout_cache import LayoutCache
from weathercal.main import app
from weathercal.models import LayoutDecision
from weathercal.ratelimit import limiter

API_KEY = "test-key"
HEADERS = {"x-api-key": API_KEY}


@pytest.fixture
def client(library, llm, monkeypatch):
    monkeypatch.setattr(routes.settings, "api_key", API_KEY)
    monkeypatch.setattr(limiter, "enabled", False)
    app.dependency_overrides[routes.get_library] = lambda: library
    app.dependency_overrides[routes.get_llm] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestMeta:

    def test_root(self, client):
        assert client.get("/").json()["status"] == "ok"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestAuth:

    def test_missing_key(self, client):
        assert client.get("/widget").status_code == 422

    def test_wrong_key(self, client):
        assert client.get("/widget", headers={"x-api-key": "nope"}).status_code == 401


class TestWidgetEndpoint:

    def test_widget(self, client, llm):
        resp = client.get("/widget", headers=HEADERS)

        assert resp.status_code == 200
        body = resp.json()
        assert body["layout"] == "events\ncurrent"
        assert body["message"] == "Tennis soon."
        assert "text(Tennis soon.)" in body["markup"]
        assert body["preview"] is None
        assert len(llm.requests) == 1

    def test_preview(self, client, llm, cache_dir):
        LayoutCache(cache_dir, routes.settings.script_name).write(LayoutDecision(layout="week", message="Cached"))

        body = client.get("/widget", params={"preview": "small"}, headers=HEADERS).json()

        assert body["preview"] == "small"
        assert body["message"] == "Tennis soon."

    def test_model_down_still_renders(self, client, llm):
        llm.error = RuntimeError("offline")

        body = client.get("/widget", headers=HEADERS).json()

        assert body["layout"] == "date\ncurrent\nhourly"


class TestLayoutEndpoints:

    def test_layout_uses_cache(self, client, llm, cache_dir):
        LayoutCache(cache_dir, routes.settings.script_name).write(LayoutDecision(layout="week", message="Cached"))

        body = client.get("/layout", headers=HEADERS).json()

        assert body == {"layout": "week", "message": "Cached"}
        assert llm.requests == []

    def test_clear_cache(self, client, cache_dir):
        LayoutCache(cache_dir, routes.settings.script_name).write(LayoutDecision(layout="week", message="Cached"))

        assert client.delete("/layout/cache", headers=HEADERS).json() == {"cleared": True}
        assert client.delete("/layout/cache", headers=HEADERS).json() == {"cleared": False}
