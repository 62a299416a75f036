"""
Lifecycle of the single OAuth credential the service acts with.

One :class:`CredentialManager` is built per process and handed to every client
that calls Google on the admin's behalf.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import Optional

from google.auth.credentials import Credentials as BaseCredentials
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials

from channel_onboarding.clients.google_auth import (
    GoogleOAuthClient,
    OAuthTokenExchangeError,
)
from channel_onboarding.core.config import GoogleSettings
from channel_onboarding.core.errors import (
    AuthExchangeError,
    RefreshError,
    UnauthorizedError,
)
from channel_onboarding.models import Credential, now_millis
from channel_onboarding.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)


class CredentialSource(ABC):
    """Anything able to hand out ready-to-use Google credentials."""

    @abstractmethod
    async def get_credentials(self) -> BaseCredentials:
        ...


class CredentialFileStore:
    """Persist the token set as JSON, optionally sealing the token fields."""

    def __init__(self, path: str | Path, cipher: Optional[TokenCipherService] = None) -> None:
        self._path = Path(path)
        self._cipher = cipher

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[Credential]:
        if not self._path.exists():
            logger.info("No stored tokens at %s; authorization needed.", self._path)
            return None
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
            if self._cipher is not None:
                document = self._cipher.unseal(document)
            credential = Credential.model_validate(document)
        except (OSError, ValueError) as exc:
            logger.error("Ignoring unreadable token file %s: %s", self._path, exc)
            return None
        logger.info("OAuth2 tokens loaded from %s", self._path)
        return credential

    def save(self, credential: Credential) -> None:
        document = credential.model_dump(exclude_none=True)
        if self._cipher is not None:
            document = self._cipher.seal(document)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, self._path)
        logger.info("Tokens saved to %s", self._path)


class CredentialManager(CredentialSource):
    """Holds one credential in memory, persists every change, refreshes on demand."""

    _REFRESH_WINDOW = timedelta(minutes=5)

    def __init__(
        self,
        *,
        store: CredentialFileStore,
        oauth_client: GoogleOAuthClient,
    ) -> None:
        self._store = store
        self._oauth = oauth_client
        self._credential: Optional[Credential] = store.load()

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    def get_authorization_url(self) -> str:
        return self._oauth.build_authorization_url()

    async def exchange_code_for_tokens(self, code: str) -> None:
        """Trade the one-time consent code for a token set and persist it."""
        issued_at = now_millis()
        try:
            payload = await self._oauth.exchange_authorization_code(code)
        except OAuthTokenExchangeError as exc:
            logger.error("Authorization code exchange failed: %s", exc)
            raise AuthExchangeError() from exc

        self._credential = Credential.from_token_response(
            payload, issued_at_millis=issued_at, previous=self._credential
        )
        self._store.save(self._credential)
        logger.info("Authorization successful")

    def is_authorized(self) -> bool:
        return bool(self._credential and self._credential.access_token)

    async def ensure_valid_token(self) -> None:
        """Refresh before returning when the token expires within five minutes.

        Callers that are about to use the token must await this first; nothing
        refreshes in the background.
        """
        if not self.is_authorized():
            raise UnauthorizedError()

        if self._credential.expires_within(self._REFRESH_WINDOW):
            await self.refresh_token()

    async def refresh_token(self) -> None:
        if not self._credential or not self._credential.refresh_token:
            raise RefreshError("No refresh token stored; re-authorization required.")

        issued_at = now_millis()
        try:
            payload = await self._oauth.refresh_token(self._credential.refresh_token)
        except OAuthTokenExchangeError as exc:
            logger.error("Access token refresh failed: %s", exc)
            raise RefreshError() from exc

        self._credential = Credential.from_token_response(
            payload, issued_at_millis=issued_at, previous=self._credential
        )
        self._store.save(self._credential)
        logger.info("Access token refreshed")

    async def get_credentials(self) -> Credentials:
        """Return google-auth credentials backed by a token valid for five minutes.

        Only the access token is handed over so google-auth cannot refresh on
        its own; every refresh goes through :meth:`ensure_valid_token` and is
        persisted.
        """
        await self.ensure_valid_token()
        return Credentials(
            token=self._credential.access_token,
            scopes=list(self._oauth.scopes),
        )


class ServiceAccountCredentialSource(CredentialSource):
    """Service account credentials, used for Sheets when one is configured."""

    _SCOPES = ("https://www.googleapis.com/auth/spreadsheets",)

    def __init__(self, google_settings: GoogleSettings) -> None:
        if not google_settings.has_service_account:
            raise ValueError("Service account email and private key must be provided.")
        info = {
            "type": "service_account",
            "client_email": google_settings.service_account_email,
            "private_key": google_settings.private_key.replace("\\n", "\n"),
            "token_uri": GoogleOAuthClient.TOKEN_URL,
        }
        self._credentials = service_account.Credentials.from_service_account_info(
            info, scopes=list(self._SCOPES)
        )

    async def get_credentials(self) -> service_account.Credentials:
        return self._credentials


__all__ = [
    "CredentialFileStore",
    "CredentialManager",
    "CredentialSource",
    "ServiceAccountCredentialSource",
]
