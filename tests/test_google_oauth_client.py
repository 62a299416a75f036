try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from channel_onboarding.clients import google_auth
from channel_onboarding.clients.google_auth import (
    YOUTUBE_SCOPES,
    GoogleOAuthClient,
    OAuthTokenExchangeError,
)
from channel_onboarding.core.config import GoogleSettings


def _settings() -> GoogleSettings:
    return GoogleSettings(
        client_id="client-123",
        client_secret="shh",
        redirect_uri="https://admin.example/oauth/callback",
    )


def _patch_transport(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    real_client = httpx.AsyncClient

    def _client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(google_auth.httpx, "AsyncClient", _client)


def test_authorization_url_requests_offline_consent() -> None:
    url = GoogleOAuthClient(_settings()).build_authorization_url()

    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    assert url.startswith(GoogleOAuthClient.AUTH_BASE_URL)
    assert params["client_id"] == ["client-123"]
    assert params["redirect_uri"] == ["https://admin.example/oauth/callback"]
    assert params["access_type"] == ["offline"]
    assert params["prompt"] == ["consent"]
    assert params["scope"][0].split(" ") == list(YOUTUBE_SCOPES)


@pytest.mark.asyncio
async def test_exchange_posts_authorization_code(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(parse_qs(request.content.decode()))
        return httpx.Response(
            200,
            json={
                "access_token": "ya29.token",
                "refresh_token": "1//refresh",
                "expires_in": 3599,
                "scope": " ".join(YOUTUBE_SCOPES),
                "token_type": "Bearer",
            },
        )

    _patch_transport(monkeypatch, handler)

    payload = await GoogleOAuthClient(_settings()).exchange_authorization_code("4/code")

    assert payload["refresh_token"] == "1//refresh"
    assert seen[0]["grant_type"] == ["authorization_code"]
    assert seen[0]["code"] == ["4/code"]


@pytest.mark.asyncio
async def test_refresh_rejection_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_transport(
        monkeypatch, lambda request: httpx.Response(400, json={"error": "invalid_grant"})
    )

    with pytest.raises(OAuthTokenExchangeError, match="invalid_grant"):
        await GoogleOAuthClient(_settings()).refresh_token("1//revoked")


@pytest.mark.asyncio
async def test_incomplete_payload_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_transport(monkeypatch, lambda request: httpx.Response(200, json={"scope": "x"}))

    with pytest.raises(OAuthTokenExchangeError):
        await GoogleOAuthClient(_settings()).exchange_authorization_code("4/code")
