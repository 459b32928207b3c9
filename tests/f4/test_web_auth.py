"""Tests for login, logout and the session gate (F4)."""

import hashlib
import hmac
import time

import pytest

from nihongo.core.errors import Unauthorized
from nihongo.web.auth import issue_session_token, verify_session_token

ADMIN_USERNAME = "sensei"
ADMIN_PASSWORD = "himitsu"


class TestLogin:
    """Tests for POST /api/login."""

    def test_login_success_sets_cookie(self, client):
        response = client.post(
            "/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("auth=")
        assert "httponly" in set_cookie.lower()
        assert "max-age=86400" in set_cookie.lower()

    def test_login_wrong_password(self, client):
        response = client.post(
            "/api/login", json={"username": ADMIN_USERNAME, "password": "wrong"}
        )
        assert response.status_code == 401
        data = response.json()
        assert data["success"] is False
        assert data["message"]
        assert "set-cookie" not in response.headers

    def test_login_fails_when_admin_not_configured(self, client, monkeypatch):
        monkeypatch.delenv("ADMIN_USERNAME")
        response = client.post("/api/login", json={"username": "", "password": ADMIN_PASSWORD})
        assert response.status_code == 401

    def test_login_unlocks_admin_api(self, client):
        assert client.post("/api/chapters", json={"title": "Bab 1"}).status_code == 401

        client.post("/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

        assert client.post("/api/chapters", json={"title": "Bab 1"}).status_code == 201


class TestLogout:
    """Tests for GET /api/logout."""

    def test_logout_redirects_to_login(self, admin_client):
        response = admin_client.get("/api/logout", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_logout_revokes_session(self, admin_client):
        admin_client.get("/api/logout", follow_redirects=False)

        response = admin_client.post("/api/chapters", json={"title": "Bab 1"})
        assert response.status_code == 401


class TestApiGate:
    """Tests for require_session_for_api."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/api/chapters"),
            ("delete", "/api/chapters/1"),
            ("get", "/api/vocabulary/1"),
            ("post", "/api/grammar/reorder"),
            ("get", "/api/admin/quizzes/1"),
            ("get", "/api/quiz/entry/1"),
            ("get", "/api/admin/reading/1"),
            ("get", "/api/reading/passage/1"),
            ("get", "/api/admin/listening/1"),
            ("delete", "/api/listening/1"),
        ],
    )
    def test_protected_routes_reject_anonymous(self, client, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_forged_cookie_rejected(self, client):
        client.cookies.set("auth", "true")
        assert client.get("/api/admin/quizzes/1").status_code == 401

    def test_expired_cookie_rejected(self, client):
        client.cookies.set("auth", issue_session_token(now=time.time() - 25 * 60 * 60))
        assert client.get("/api/admin/quizzes/1").status_code == 401

    def test_fresh_cookie_accepted(self, client):
        client.cookies.set("auth", issue_session_token())
        assert client.get("/api/admin/quizzes/1").status_code == 200


class TestSessionToken:
    """Tests for the signed token format."""

    def test_round_trip(self, app):
        assert verify_session_token(issue_session_token()) == "admin"

    def test_tampered_subject_rejected(self, app):
        token = issue_session_token()
        value, sig = token.rsplit(".", 1)
        forged = value.replace("admin", "guest") + "." + sig
        assert verify_session_token(forged) is None

    def test_other_secret_rejected(self, app, monkeypatch):
        token = issue_session_token()
        monkeypatch.setenv("SESSION_SECRET", "another-secret")
        assert verify_session_token(token) is None

    def test_garbage_rejected(self, app):
        assert verify_session_token(None) is None
        assert verify_session_token("") is None
        assert verify_session_token("no-dot") is None


class TestUnconfiguredSecret:
    """Without any signing key, no session is ever valid."""

    @pytest.fixture
    def bare_client(self, client, monkeypatch):
        for name in ("ADMIN_USERNAME", "ADMIN_PASSWORD", "SESSION_SECRET"):
            monkeypatch.delenv(name, raising=False)
        return client

    def test_empty_key_cookie_rejected(self, bare_client):
        value = f"admin:{int(time.time())}"
        sig = hmac.new(b"", value.encode("utf-8"), hashlib.sha256).hexdigest()
        bare_client.cookies.set("auth", f"{value}.{sig}")

        response = bare_client.post("/api/chapters", json={"title": "Bab 1"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert bare_client.get("/api/chapters").json() == []

    def test_empty_key_cookie_does_not_open_pages(self, bare_client):
        value = f"admin:{int(time.time())}"
        sig = hmac.new(b"", value.encode("utf-8"), hashlib.sha256).hexdigest()
        bare_client.cookies.set("auth", f"{value}.{sig}")

        response = bare_client.get("/dashboard", follow_redirects=False)
        assert response.status_code == 303

    def test_token_not_issued(self, bare_client):
        with pytest.raises(Unauthorized):
            issue_session_token()

    def test_secret_alone_is_not_a_login(self, bare_client, monkeypatch):
        monkeypatch.setenv("SESSION_SECRET", "test-secret")
        response = bare_client.post("/api/login", json={"username": "", "password": ""})
        assert response.status_code == 401


class TestLogoutScope:
    """Logout clears the client cookie; tokens are stateless."""

    def test_copied_cookie_outlives_logout(self, admin_client, app):
        token = admin_client.cookies.get("auth")
        admin_client.get("/api/logout", follow_redirects=False)

        assert admin_client.get("/api/admin/quizzes/1").status_code == 401
        assert verify_session_token(token) == "admin"

    def test_rotating_secret_ends_sessions(self, admin_client, monkeypatch):
        monkeypatch.setenv("SESSION_SECRET", "rotated-secret")
        assert admin_client.get("/api/admin/quizzes/1").status_code == 401
