"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_admin_channel_service,
    get_credential_manager,
    get_google_oauth_client,
    get_intake_service,
    get_provisioning_service,
    get_record_store,
    get_sheets_client,
    get_sheets_credential_source,
    get_token_cipher_service,
    get_webhook_notifier,
    get_youtube_client,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_admin_channel_service",
    "get_app_settings",
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
