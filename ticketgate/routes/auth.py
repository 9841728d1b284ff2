import logging
import secrets

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse

from ..errors import LoginFailed

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)

SIGNUP_SCREEN_HINT = "signup"


def _safe_return_to(return_to: str | None) -> str:
    if not return_to or not return_to.startswith("/") or return_to.startswith("//"):
        return "/"
    return return_to


def _callback_url(request: Request) -> str:
    return f"{request.app.state.settings.base_url}/callback"


def _start_login(
    request: Request, return_to: str | None, screen_hint: str | None = None
) -> RedirectResponse:
    state = secrets.token_urlsafe(16)
    request.session["oidc_state"] = state
    request.session["return_to"] = _safe_return_to(return_to)
    url = request.app.state.oidc.authorization_url(
        _callback_url(request), state, screen_hint=screen_hint
    )
    return RedirectResponse(url=url, status_code=302)


@router.get("/login")
def login(
    request: Request, return_to: str | None = Query(None, alias="returnTo")
) -> RedirectResponse:
    return _start_login(request, return_to)


@router.get("/sign-up")
def sign_up(
    request: Request, return_to: str | None = Query(None, alias="returnTo")
) -> RedirectResponse:
    return _start_login(request, return_to, screen_hint=SIGNUP_SCREEN_HINT)


@router.get("/callback")
def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    expected_state = request.session.pop("oidc_state", None)
    return_to = _safe_return_to(request.session.pop("return_to", None))

    if error:
        logger.warning("Identity provider returned error: %s", error)
        raise LoginFailed("Login failed")
    if not code or not state or not expected_state:
        raise LoginFailed("Login failed")
    if not secrets.compare_digest(state, expected_state):
        logger.warning("Login state mismatch")
        raise LoginFailed("Login failed")

    oidc = request.app.state.oidc
    tokens = oidc.exchange_code(code, _callback_url(request))
    profile = oidc.fetch_userinfo(tokens["access_token"])
    request.session["user"] = {
        "sub": profile.get("sub"),
        "name": profile.get("name"),
        "email": profile.get("email"),
    }
    return RedirectResponse(url=return_to, status_code=302)


@router.get("/logout")
def logout(request: Request) -> RedirectResponse:
    request.session.clear()
    url = request.app.state.oidc.logout_url(request.app.state.settings.base_url)
    return RedirectResponse(url=url, status_code=302)
