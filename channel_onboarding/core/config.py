"""
Application configuration models and helpers.

Centralizes settings management so the API, the service layer and the
``scripts`` helpers share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class GoogleSettings(BaseSettings):
    """OAuth client configuration and optional service account for Google APIs."""

    model_config = SettingsConfigDict(env_prefix="GOOGLE_", extra="ignore")

    client_id: str
    client_secret: str
    redirect_uri: str = Field(
        "urn:ietf:wg:oauth:2.0:oob",
        description="Where Google sends the admin after consent.",
    )
    service_account_email: Optional[str] = Field(
        None,
        description="When set together with private_key, Sheets uses the service account.",
    )
    private_key: Optional[str] = Field(
        None,
        description="PEM private key; literal '\\n' sequences are expanded.",
    )

    @property
    def has_service_account(self) -> bool:
        return bool(self.service_account_email and self.private_key)


class SheetsSettings(BaseSettings):
    """Location of the client intake spreadsheet."""

    model_config = SettingsConfigDict(env_prefix="GOOGLE_SHEETS_", extra="ignore")

    spreadsheet_id: str
    sheet_name: str = Field("Clients", description="Tab holding one row per client.")


class YouTubeSettings(BaseSettings):
    """Channel defaults applied at intake."""

    model_config = SettingsConfigDict(env_prefix="YOUTUBE_", extra="ignore")

    master_channel_id: str = Field(
        "PLACEHOLDER_CHANNEL_ID",
        description="Channel handed out to new clients until a real one is attached.",
    )


class OAuthSettings(BaseSettings):
    """Credential file location and protection."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTH_", extra="ignore", populate_by_name=True
    )

    token_path: str = Field("tokens.json", description="Where the token set is persisted.")
    encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description="Encrypt token fields in the credential file when provided.",
    )


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    cors_allow_origins: str = Field(
        "*",
        validation_alias="CORS_ALLOW_ORIGINS",
        description="Comma separated list of origins allowed to call the API.",
    )
    webhook_url: Optional[str] = Field(
        None,
        validation_alias="ONBOARDING_WEBHOOK_URL",
        description="Optional workflow hook notified after each onboarding.",
    )
    http_timeout_seconds: float = Field(30.0, validation_alias="HTTP_TIMEOUT_SECONDS")
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    sheets: SheetsSettings = Field(default_factory=SheetsSettings)
    youtube: YouTubeSettings = Field(default_factory=YouTubeSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)

    @property
    def allowed_origins(self) -> list[str]:
        return [
            origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()
        ]


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "OAuthSettings",
    "SheetsSettings",
    "YouTubeSettings",
    "get_settings",
]
