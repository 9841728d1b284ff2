import json

import httpx
import pytest

from ticketgate.auth import ManagementTokenClient
from ticketgate.errors import UpstreamError


@pytest.fixture()
def m2m_settings(settings):
    return settings.model_copy(
        update={
            "m2m_auth0_domain": "mgmt.example.com",
            "m2m_client_id": "m2m-client",
            "m2m_client_secret": "m2m-secret",
        }
    )


def test_fetch_token_uses_client_credentials(m2m_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"access_token": "m2m-token", "expires_in": 86400})

    client = ManagementTokenClient(m2m_settings, transport=httpx.MockTransport(handler))

    assert client.fetch_token() == "m2m-token"
    assert seen["url"] == "https://mgmt.example.com/oauth/token"
    assert seen["body"] == {
        "client_id": "m2m-client",
        "client_secret": "m2m-secret",
        "audience": "https://mgmt.example.com/api/v2/",
        "grant_type": "client_credentials",
    }


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"error": "access_denied"}),
        httpx.Response(200, json={}),
        httpx.Response(200, content=b"not json"),
    ],
)
def test_fetch_token_failures(m2m_settings, response):
    client = ManagementTokenClient(
        m2m_settings, transport=httpx.MockTransport(lambda request: response)
    )

    with pytest.raises(UpstreamError):
        client.fetch_token()


def test_unconfigured_credentials(settings):
    with pytest.raises(ValueError):
        ManagementTokenClient(settings)
