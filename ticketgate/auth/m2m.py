import logging

import httpx

from ..config import Settings
from ..errors import UpstreamError

logger = logging.getLogger(__name__)


class ManagementTokenClient:
    """Client-credentials tokens for the identity provider's management API.

    These tokens identify this service, not the visitor, and never end up in
    the user session.
    """

    def __init__(
        self, settings: Settings, transport: httpx.BaseTransport | None = None
    ) -> None:
        if not settings.m2m_configured:
            raise ValueError("M2M credentials are not configured")
        self.domain = settings.m2m_auth0_domain
        self.client_id = settings.m2m_client_id
        self.client_secret = settings.m2m_client_secret
        self.timeout = settings.http_timeout_seconds
        self.transport = transport

    @property
    def audience(self) -> str:
        return f"https://{self.domain}/api/v2/"

    def fetch_token(self) -> str:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "audience": self.audience,
            "grant_type": "client_credentials",
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(f"https://{self.domain}/oauth/token", json=data)
                response.raise_for_status()
                token = response.json().get("access_token")
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error getting M2M token: %s", exc)
            raise UpstreamError("Failed to obtain M2M token") from exc
        if not token:
            raise UpstreamError("Failed to obtain M2M token")
        return token
