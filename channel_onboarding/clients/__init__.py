"""Expose constructed client wrappers."""

from .google_auth import GoogleOAuthClient, OAuthTokenExchangeError, YOUTUBE_SCOPES
from .google_sheets import GoogleSheetsClient
from .webhook import WebhookNotifier
from .youtube import YouTubeClient

__all__ = [
    "GoogleOAuthClient",
    "GoogleSheetsClient",
    "OAuthTokenExchangeError",
    "WebhookNotifier",
    "YOUTUBE_SCOPES",
    "YouTubeClient",
]
