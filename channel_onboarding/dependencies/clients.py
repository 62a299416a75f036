"""
Factory functions to provide shared clients and services as FastAPI dependencies.

Each ``lru_cache`` factory builds its object once per process; the credential
manager built here is the one every Google client receives.
"""

from functools import lru_cache

from channel_onboarding.clients import (
    GoogleOAuthClient,
    GoogleSheetsClient,
    WebhookNotifier,
    YouTubeClient,
)
from channel_onboarding.dependencies.config import get_app_settings
from channel_onboarding.services import (
    AdminChannelService,
    ChannelProvisioningService,
    ClientRecordRepository,
    CredentialFileStore,
    CredentialManager,
    CredentialSource,
    IntakeService,
    ServiceAccountCredentialSource,
    SheetsClientRecordStore,
    TokenCipherService,
)


def _settings():
    """Settings shared by the client factories."""
    return get_app_settings()


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    settings = _settings()
    return GoogleOAuthClient(settings.google)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService | None:
    """Provide the credential file cipher when an encryption secret is configured."""
    secret = _settings().oauth.encryption_secret
    if not secret:
        return None
    return TokenCipherService(secret=secret)


@lru_cache()
def get_credential_manager() -> CredentialManager:
    """Load the persisted token set once and share it across the process."""
    settings = _settings()
    return CredentialManager(
        store=CredentialFileStore(
            settings.oauth.token_path, cipher=get_token_cipher_service()
        ),
        oauth_client=get_google_oauth_client(),
    )


@lru_cache()
def get_sheets_credential_source() -> CredentialSource:
    """Sheets authenticates as the service account when one is configured."""
    settings = _settings()
    if settings.google.has_service_account:
        return ServiceAccountCredentialSource(settings.google)
    return get_credential_manager()


@lru_cache()
def get_sheets_client() -> GoogleSheetsClient:
    """Provide Google Sheets client instance."""
    settings = _settings()
    return GoogleSheetsClient(
        get_sheets_credential_source(),
        spreadsheet_id=settings.sheets.spreadsheet_id,
    )


@lru_cache()
def get_youtube_client() -> YouTubeClient:
    """Provide YouTube Data API client instance."""
    return YouTubeClient(get_credential_manager())


@lru_cache()
def get_record_store() -> ClientRecordRepository:
    """Provide the client record store backed by the intake sheet."""
    settings = _settings()
    return SheetsClientRecordStore(
        get_sheets_client(), sheet_name=settings.sheets.sheet_name
    )


@lru_cache()
def get_webhook_notifier() -> WebhookNotifier | None:
    """Provide the onboarding webhook notifier when a URL is configured."""
    settings = _settings()
    if not settings.webhook_url:
        return None
    return WebhookNotifier(settings.webhook_url, timeout=settings.http_timeout_seconds)


def get_provisioning_service() -> ChannelProvisioningService:
    """Build a provisioning service around the shared YouTube client."""
    return ChannelProvisioningService(
        get_youtube_client(),
        get_credential_manager(),
        download_timeout=_settings().http_timeout_seconds,
    )


def get_intake_service() -> IntakeService:
    """Build the onboarding orchestrator."""
    settings = _settings()
    return IntakeService(
        get_record_store(),
        placeholder_channel_id=settings.youtube.master_channel_id,
        notifier=get_webhook_notifier(),
    )


def get_admin_channel_service() -> AdminChannelService:
    """Build the admin dashboard service."""
    settings = _settings()
    return AdminChannelService(
        get_record_store(),
        get_provisioning_service(),
        placeholder_channel_id=settings.youtube.master_channel_id,
    )


__all__ = [
    "get_admin_channel_service",
    "get_credential_manager",
    "get_google_oauth_client",
    "get_intake_service",
    "get_provisioning_service",
    "get_record_store",
    "get_sheets_client",
    "get_sheets_credential_source",
    "get_token_cipher_service",
    "get_webhook_notifier",
    "get_youtube_client",
]
