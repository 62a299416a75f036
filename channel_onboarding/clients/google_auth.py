"""
Google OAuth utilities.

These helpers build the admin consent URL and talk to the token endpoint for
the one-time code exchange and subsequent refreshes.
"""

from __future__ import annotations

from typing import Any, Dict
from urllib.parse import urlencode

import httpx

from fastapi import status

from channel_onboarding.core.config import GoogleSettings

YOUTUBE_SCOPES: tuple[str, ...] = (
    "https://www.googleapis.com/auth/youtube",
    "https://www.googleapis.com/auth/youtube.upload",
    "https://www.googleapis.com/auth/youtube.force-ssl",
    "https://www.googleapis.com/auth/spreadsheets",
)


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint returns an error."""


class GoogleOAuthClient:
    """Build Google authorization URLs and exchange authorization codes."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(self, google_settings: GoogleSettings, *, timeout: float = 10.0) -> None:
        self._google = google_settings
        self._timeout = timeout

    @property
    def scopes(self) -> tuple[str, ...]:
        return YOUTUBE_SCOPES

    def build_authorization_url(self, access_type: str = "offline") -> str:
        """Construct the Google OAuth consent URL.

        ``prompt=consent`` forces Google to hand out a refresh token even when
        the account granted access before.
        """
        params = {
            "client_id": self._google.client_id,
            "redirect_uri": self._google.redirect_uri,
            "response_type": "code",
            "scope": " ".join(YOUTUBE_SCOPES),
            "access_type": access_type,
            "prompt": "consent",
        }
        query = urlencode(params)
        return f"{self.AUTH_BASE_URL}?{query}"

    async def exchange_authorization_code(self, code: str) -> Dict[str, Any]:
        """
        Exchange an authorization code for tokens.

        Returns the raw token payload (access_token, refresh_token, expires_in,
        scope, token_type).
        """
        payload = {
            "code": code,
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "redirect_uri": self._google.redirect_uri,
            "grant_type": "authorization_code",
        }
        token_payload = await self._post_token_request(payload)

        if not token_payload.get("access_token") or not token_payload.get("expires_in"):
            raise OAuthTokenExchangeError("Incomplete token payload returned from Google.")

        return token_payload

    async def refresh_token(self, refresh_token: str) -> Dict[str, Any]:
        """Refresh the access token using a stored refresh token."""
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }
        token_payload = await self._post_token_request(payload)

        if not token_payload.get("access_token") or not token_payload.get("expires_in"):
            raise OAuthTokenExchangeError("Incomplete refresh payload returned from Google.")

        return token_payload

    async def _post_token_request(self, payload: Dict[str, str]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self.TOKEN_URL, data=payload)
        except httpx.HTTPError as exc:
            raise OAuthTokenExchangeError(f"Token endpoint unreachable: {exc}") from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthTokenExchangeError(response.text)

        return response.json()


__all__ = [
    "GoogleOAuthClient",
    "OAuthTokenExchangeError",
    "YOUTUBE_SCOPES",
]
