import importlib

import pytest
from fastapi.testclient import TestClient

from menu_manager.config import Settings
from menu_manager.main import create_app
from menu_manager.notifications import InMemorySuggestionSink


ADMIN_HEADERS = {"X-User-Id": "42", "X-User-Capabilities": "menu.admin"}
AUTHORITY_HEADERS = {"X-User-Id": "44", "X-User-Authority": "3"}
CAPABILITY_HEADERS = {"X-User-Id": "43", "X-User-Capabilities": "menu.admin, other"}
USER_HEADERS = {"X-User-Id": "7"}


class PngRenderer:
    def render(self, markup, width, height):
        return b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def client():
    app = create_app(settings=Settings(_env_file=None), suggestion_sink=InMemorySuggestionSink())
    with TestClient(app) as c:
        yield c


class TestHealth:
    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "entries": 5}


class TestReadEndpoints:
    def test_browse(self, client):
        response = client.get("/api/menu/entries", params={"category": "娱乐"})
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert [e["id"] for e in data["entries"]] == ["hitokoto", "music"]
        assert data["message"].startswith("📋 功能菜单")
        assert "image" not in data

    def test_layout(self, client):
        response = client.get("/api/menu/layout", params={"all": "true"})
        assert response.status_code == 200
        plan = response.json()["plan"]
        assert plan["columns"] == 4
        assert plan["show_all"] is True
        assert plan["footer"][0] == "已显示全部 5 项"

    def test_list_all_and_categories(self, client):
        assert len(client.get("/api/menu/entries/all").json()["entries"]) == 5
        message = client.get("/api/menu/categories").json()["message"]
        assert "• 工具" in message

    def test_search(self, client):
        response = client.get("/api/menu/search", params={"keyword": "签到"})
        assert [e["id"] for e in response.json()["entries"]] == ["signin"]
        assert client.get("/api/menu/search").status_code == 400


class TestAdminEndpoints:
    def test_add_edit_toggle_move_delete(self, client):
        response = client.post(
            "/api/menu/entries",
            json={"name": "天气", "command": "#天气", "category": "工具"},
            headers=ADMIN_HEADERS,
        )
        assert response.status_code == 200
        entry_id = response.json()["entry"]["id"]

        response = client.patch(
            f"/api/menu/entries/{entry_id}",
            json={"description": "查询天气"},
            headers=CAPABILITY_HEADERS,
        )
        assert response.status_code == 200
        assert response.json()["entry"]["description"] == "查询天气"
        assert response.json()["entry"]["name"] == "天气"

        response = client.post(f"/api/menu/entries/{entry_id}/toggle", headers=ADMIN_HEADERS)
        assert response.json()["entry"]["enabled"] is False

        response = client.put(
            f"/api/menu/entries/{entry_id}/category",
            json={"category": "生活"},
            headers=ADMIN_HEADERS,
        )
        assert response.json()["entry"]["category"] == "生活"

        response = client.delete(f"/api/menu/entries/{entry_id}", headers=ADMIN_HEADERS)
        assert response.status_code == 200
        assert client.get("/").json()["entries"] == 5

    def test_denied(self, client):
        response = client.delete("/api/menu/entries/music", headers=USER_HEADERS)
        assert response.status_code == 403
        assert response.json()["outcome"] == "denied"
        response = client.delete("/api/menu/entries/music")
        assert response.status_code == 403
        assert client.get("/").json()["entries"] == 5

    def test_not_found(self, client):
        response = client.delete("/api/menu/entries/nonexistent", headers=ADMIN_HEADERS)
        assert response.status_code == 404
        assert client.get("/").json()["entries"] == 5

    def test_invalid_add(self, client):
        response = client.post(
            "/api/menu/entries", json={"name": "", "command": "#x"}, headers=ADMIN_HEADERS
        )
        assert response.status_code == 400


class TestSuggestionEndpoint:
    def test_suggest(self, client):
        response = client.post(
            "/api/menu/suggestions", json={"name": "天气", "command": "#天气"}, headers=USER_HEADERS
        )
        assert response.status_code == 200
        assert "感谢您的建议" in response.json()["message"]


class TestImageEndpoint:
    def test_png_response(self):
        settings = Settings(_env_file=None, enable_image_menu=True)
        app = create_app(settings=settings, renderer=PngRenderer())
        with TestClient(app) as client:
            response = client.get("/api/menu/entries")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_unconfigured_renderer(self):
        settings = Settings(_env_file=None, enable_image_menu=True, render_service_url=None)
        app = create_app(settings=settings)
        with TestClient(app) as client:
            response = client.get("/api/menu/entries")
        assert response.status_code == 503
        assert response.json()["outcome"] == "unavailable"


def test_store_cleared_on_shutdown():
    app = create_app(settings=Settings(_env_file=None))
    with TestClient(app):
        assert len(app.state.facade.store) == 5
    assert len(app.state.facade.store) == 0


class TestAuthorityHeader:
    def test_ignored_by_default(self, client):
        response = client.delete("/api/menu/entries/music", headers=AUTHORITY_HEADERS)
        assert response.status_code == 403
        assert client.get("/").json()["entries"] == 5

    def test_honored_when_threshold_configured(self):
        app = create_app(settings=Settings(_env_file=None, admin_authority=3))
        with TestClient(app) as client:
            low = {"X-User-Id": "45", "X-User-Authority": "2"}
            assert client.delete("/api/menu/entries/music", headers=low).status_code == 403
            response = client.delete("/api/menu/entries/music", headers=AUTHORITY_HEADERS)
            assert response.status_code == 200
            assert client.get("/").json()["entries"] == 4


def test_importing_app_factory_ignores_broken_env(monkeypatch):
    import menu_manager.main

    monkeypatch.setenv("MENU_ITEMS_PER_PAGE", "999")
    module = importlib.reload(menu_manager.main)
    assert callable(module.create_app)
    assert not hasattr(module, "app")
