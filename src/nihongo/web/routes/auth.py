"""Login and logout endpoints."""

import structlog
from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from nihongo.config import load_app_config
from nihongo.web.auth import LOGIN_PAGE, check_credentials, issue_session_token
from nihongo.web.schemas import LoginRequest, LoginResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, response: Response):
    """Grant the admin session cookie for matching credentials."""
    if not check_credentials(credentials.username, credentials.password):
        logger.info("auth.login_failed", username=credentials.username)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": "Wrong username or password"},
        )

    auth = load_app_config().auth
    response.set_cookie(
        auth.cookie_name,
        issue_session_token(),
        max_age=auth.max_age_seconds,
        httponly=True,
        samesite="lax",
    )
    logger.info("auth.login", username=credentials.username)
    return LoginResponse(success=True)


@router.get("/logout")
def logout() -> RedirectResponse:
    """Delete the session cookie and go back to the login page.

    Sessions are stateless signed tokens: a copy of the cookie taken
    before logout stays valid until it expires (auth.session_hours).
    Changing the signing key invalidates every outstanding session.
    """
    resp = RedirectResponse(LOGIN_PAGE, status_code=status.HTTP_303_SEE_OTHER)
    resp.delete_cookie(load_app_config().auth.cookie_name)
    return resp
