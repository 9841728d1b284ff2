import logging
from urllib.parse import urlencode

import httpx

from ..config import Settings
from ..errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = "openid profile email"


class OIDCClient:
    """Authorization-code login against an Auth0-style identity provider."""

    def __init__(
        self, settings: Settings, transport: httpx.BaseTransport | None = None
    ) -> None:
        self.issuer = f"https://{settings.auth0_domain}"
        self.client_id = settings.client_id
        self.client_secret = settings.client_secret
        self.timeout = settings.http_timeout_seconds
        self.transport = transport

    def authorization_url(
        self, redirect_uri: str, state: str, screen_hint: str | None = None
    ) -> str:
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": DEFAULT_SCOPE,
            "state": state,
        }
        if screen_hint:
            params["screen_hint"] = screen_hint
        return f"{self.issuer}/authorize?{urlencode(params)}"

    def logout_url(self, return_to: str) -> str:
        params = {"client_id": self.client_id, "returnTo": return_to}
        return f"{self.issuer}/v2/logout?{urlencode(params)}"

    def exchange_code(self, code: str, redirect_uri: str) -> dict:
        data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
        }
        tokens = self._request("POST", "/oauth/token", data=data)
        if not tokens.get("access_token"):
            raise UpstreamError("Identity provider returned no access token")
        return tokens

    def fetch_userinfo(self, access_token: str) -> dict:
        return self._request(
            "GET",
            "/userinfo",
            headers={"Authorization": f"Bearer {access_token}"},
        )

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            with httpx.Client(
                base_url=self.issuer, timeout=self.timeout, transport=self.transport
            ) as client:
                response = client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Identity provider call %s %s failed: %s", method, path, exc)
            raise UpstreamError("Identity provider request failed") from exc
