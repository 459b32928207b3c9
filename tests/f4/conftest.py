"""Fixtures for F4 tests - Web API."""

import pytest
from fastapi.testclient import TestClient

from nihongo.web.api import create_app

ADMIN_USERNAME = "sensei"
ADMIN_PASSWORD = "himitsu"


@pytest.fixture
def app(db_path, monkeypatch):
    """App bound to the temp database with known admin credentials."""
    monkeypatch.setenv("ADMIN_USERNAME", ADMIN_USERNAME)
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("SESSION_SECRET", "test-secret")
    return create_app()


@pytest.fixture
def client(app):
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def admin_client(app):
    """Client holding a valid admin session cookie."""
    admin = TestClient(app)
    response = admin.post(
        "/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return admin


@pytest.fixture
def chapter_id(admin_client):
    """Id of a chapter created through the API."""
    response = admin_client.post("/api/chapters", json={"title": "Bab 1", "description": "Perkenalan"})
    return response.json()["id"]
