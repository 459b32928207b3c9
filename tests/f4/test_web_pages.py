"""Tests for HTML pages and the health endpoint (F4)."""

import pytest
from fastapi.testclient import TestClient

from nihongo.web.api import create_app


@pytest.fixture
def site(tmp_path, monkeypatch, db_path):
    """Working directory with a public/ folder holding a few pages."""
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>Beranda</h1>", encoding="utf-8")
    (public / "login.html").write_text("<form>login</form>", encoding="utf-8")
    (public / "dashboard.html").write_text("<h1>Dashboard</h1>", encoding="utf-8")
    (public / "style.css").write_text("body {}", encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ADMIN_USERNAME", "sensei")
    monkeypatch.setenv("ADMIN_PASSWORD", "himitsu")
    return TestClient(create_app())


class TestPages:
    """Public pages and gated admin panels."""

    def test_public_page_served(self, site):
        response = site.get("/")
        assert response.status_code == 200
        assert "Beranda" in response.text

    def test_missing_public_page(self, site):
        assert site.get("/quiz").status_code == 404

    def test_admin_page_redirects_anonymous(self, site):
        response = site.get("/dashboard", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_admin_page_redirect_lands_on_login(self, site):
        response = site.get("/panel-grammar")
        assert response.status_code == 200
        assert "login" in response.text

    def test_admin_page_served_after_login(self, site):
        site.post("/api/login", json={"username": "sensei", "password": "himitsu"})
        response = site.get("/dashboard", follow_redirects=False)
        assert response.status_code == 200
        assert "Dashboard" in response.text

    def test_static_assets_mounted(self, site):
        response = site.get("/static/style.css")
        assert response.status_code == 200


class TestHealth:
    """Tests for /health."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "0.1.0"
        assert "timestamp" in data
