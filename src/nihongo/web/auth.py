"""Session gate: the signed admin cookie.

There is one admin identity, configured through environment variables.
Logging in sets an HTTP-only cookie holding "<subject>:<issued_at>.<hmac>";
the token is accepted while its signature matches, its subject is the
admin and it is younger than the configured session lifetime.

Guards:
- require_session_for_api: FastAPI dependency, raises Unauthorized (401)
- require_session_for_page: returns a redirect to /login, or None
"""

from __future__ import annotations

import hashlib
import hmac
import time

import structlog
from fastapi import Request
from fastapi.responses import RedirectResponse

from nihongo.config import load_app_config
from nihongo.core.errors import Unauthorized

logger = structlog.get_logger(__name__)

ADMIN_SUBJECT = "admin"
LOGIN_PAGE = "/login"


def _signature(value: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), value.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_session_token(subject: str = ADMIN_SUBJECT, now: float | None = None) -> str:
    """Create a signed token for subject, issued at now.

    Raises:
        Unauthorized: If no signing key is configured
    """
    auth = load_app_config().auth
    secret = auth.get_secret()
    if not secret:
        logger.warning("auth.not_configured", secret_env=auth.secret_env)
        raise Unauthorized("Session signing is not configured")
    issued_at = int(now if now is not None else time.time())
    value = f"{subject}:{issued_at}"
    return f"{value}.{_signature(value, secret)}"


def verify_session_token(token: str | None, now: float | None = None) -> str | None:
    """Check a session token.

    Returns:
        The token's subject when valid, None otherwise
    """
    if not token or "." not in token:
        return None

    auth = load_app_config().auth
    secret = auth.get_secret()
    if not secret:
        logger.warning("auth.not_configured", secret_env=auth.secret_env)
        return None

    value, sig = token.rsplit(".", 1)
    expected = _signature(value, secret)
    if not hmac.compare_digest(sig.encode("utf-8"), expected.encode("utf-8")):
        return None

    subject, _, issued = value.partition(":")
    if subject != ADMIN_SUBJECT or not issued.isdigit():
        return None

    age = (now if now is not None else time.time()) - int(issued)
    if age < 0 or age > auth.max_age_seconds:
        return None

    return subject


def check_credentials(username: str, password: str) -> bool:
    """Compare credentials with the configured admin identity."""
    auth = load_app_config().auth
    expected_user = auth.get_username()
    expected_password = auth.get_password()
    if not expected_user or not expected_password:
        logger.warning("auth.not_configured", username_env=auth.username_env)
        return False

    user_ok = hmac.compare_digest(username.encode("utf-8"), expected_user.encode("utf-8"))
    password_ok = hmac.compare_digest(
        password.encode("utf-8"), expected_password.encode("utf-8")
    )
    return user_ok and password_ok


def is_admin(request: Request) -> bool:
    """Whether the request carries a valid session cookie."""
    cookie_name = load_app_config().auth.cookie_name
    return verify_session_token(request.cookies.get(cookie_name)) is not None


def require_session_for_api(request: Request) -> None:
    """Dependency for admin API routes."""
    if not is_admin(request):
        raise Unauthorized()


def require_session_for_page(request: Request) -> RedirectResponse | None:
    """Redirect unauthenticated page requests to the login page."""
    if not is_admin(request):
        return RedirectResponse(LOGIN_PAGE, status_code=303)
    return None
