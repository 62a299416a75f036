"""Public schema exports."""

from .admin import (
    ChannelInfoResponse,
    DashboardChannel,
    PendingChannelsResponse,
    SetupChannelRequest,
    SetupChannelResponse,
)
from .auth import (
    OAuthCallbackPayload,
    OAuthCallbackResponse,
    OAuthStatusResponse,
    OAuthUrlResponse,
)
from .onboarding import OnboardRequest, OnboardResponse

__all__ = [
    "ChannelInfoResponse",
    "DashboardChannel",
    "OAuthCallbackPayload",
    "OAuthCallbackResponse",
    "OAuthStatusResponse",
    "OAuthUrlResponse",
    "OnboardRequest",
    "OnboardResponse",
    "PendingChannelsResponse",
    "SetupChannelRequest",
    "SetupChannelResponse",
]
