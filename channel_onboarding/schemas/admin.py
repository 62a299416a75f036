"""
Pydantic models for the admin dashboard endpoints.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from channel_onboarding.models import ChannelSetupUpdates, ClientStatus, is_valid_channel_id

from .base import CamelModel


class DashboardChannel(CamelModel):
    """One client row shaped for the dashboard cards."""

    id: str
    company_name: str
    industry: str
    channel_name: str
    description: str
    keywords: List[str] = Field(default_factory=list)
    banner_url: str = ""
    trailer_url: str = ""
    status: ClientStatus
    created_at: str
    youtube_channel_id: Optional[str] = None


class PendingChannelsResponse(CamelModel):
    channels: List[DashboardChannel] = Field(default_factory=list)


class SetupChannelRequest(CamelModel):
    """Attach a manually created channel to a client and provision it."""

    client_id: str = Field(..., min_length=1)
    youtube_channel_id: str = Field(..., min_length=1)

    @field_validator("youtube_channel_id")
    @classmethod
    def _check_channel_id(cls, value: str) -> str:
        if not is_valid_channel_id(value):
            raise ValueError("Invalid YouTube channel ID format")
        return value


class SetupChannelResponse(CamelModel):
    success: bool
    channel_id: str
    channel_url: str
    updates: ChannelSetupUpdates


class ChannelInfoResponse(CamelModel):
    channel: Optional[Dict[str, Any]] = None


__all__ = [
    "ChannelInfoResponse",
    "DashboardChannel",
    "PendingChannelsResponse",
    "SetupChannelRequest",
    "SetupChannelResponse",
]
