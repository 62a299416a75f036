"""
Admin dashboard endpoints: client overview, channel setup and OAuth plumbing.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from channel_onboarding.dependencies import (
    get_admin_channel_service,
    get_credential_manager,
    get_provisioning_service,
)
from channel_onboarding.schemas import (
    ChannelInfoResponse,
    OAuthCallbackPayload,
    OAuthCallbackResponse,
    OAuthStatusResponse,
    OAuthUrlResponse,
    PendingChannelsResponse,
    SetupChannelRequest,
    SetupChannelResponse,
)
from channel_onboarding.services import (
    AdminChannelService,
    ChannelProvisioningService,
    CredentialManager,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/pending-channels", response_model=PendingChannelsResponse)
async def list_pending_channels(
    service: Annotated[AdminChannelService, Depends(get_admin_channel_service)],
) -> PendingChannelsResponse:
    """Every client row, shaped for the dashboard."""
    channels = await service.list_channels()
    return PendingChannelsResponse(channels=channels)


@router.post("/setup-channel", response_model=SetupChannelResponse)
async def setup_channel(
    payload: SetupChannelRequest,
    service: Annotated[AdminChannelService, Depends(get_admin_channel_service)],
) -> SetupChannelResponse:
    """Provision a manually created channel with the client's assets."""
    return await service.setup_channel(
        client_id=payload.client_id,
        youtube_channel_id=payload.youtube_channel_id,
    )


@router.get("/oauth/url", response_model=OAuthUrlResponse)
async def get_oauth_url(
    credentials: Annotated[CredentialManager, Depends(get_credential_manager)],
) -> OAuthUrlResponse:
    return OAuthUrlResponse(auth_url=credentials.get_authorization_url())


@router.post("/oauth/callback", response_model=OAuthCallbackResponse)
async def complete_oauth(
    payload: OAuthCallbackPayload,
    credentials: Annotated[CredentialManager, Depends(get_credential_manager)],
) -> OAuthCallbackResponse:
    """Exchange the consent code and persist the resulting tokens."""
    await credentials.exchange_code_for_tokens(payload.code)
    return OAuthCallbackResponse()


@router.get("/oauth/callback", response_model=OAuthCallbackResponse)
async def complete_oauth_redirect(
    credentials: Annotated[CredentialManager, Depends(get_credential_manager)],
    code: str = Query(..., min_length=1, description="Authorization code returned by Google."),
) -> OAuthCallbackResponse:
    """Browser redirect variant of the callback."""
    return await complete_oauth(OAuthCallbackPayload(code=code), credentials)


@router.get("/oauth/status", response_model=OAuthStatusResponse)
async def get_oauth_status(
    credentials: Annotated[CredentialManager, Depends(get_credential_manager)],
) -> OAuthStatusResponse:
    authorized = credentials.is_authorized()
    return OAuthStatusResponse(
        is_authorized=authorized,
        message=(
            "OAuth2 is configured and ready"
            if authorized
            else "OAuth2 authorization required"
        ),
    )


@router.get("/channel/{channel_id}", response_model=ChannelInfoResponse)
async def get_channel(
    channel_id: str,
    provisioning: Annotated[ChannelProvisioningService, Depends(get_provisioning_service)],
) -> ChannelInfoResponse:
    channel = await provisioning.get_channel_info(channel_id)
    if channel is None:
        logger.info("Channel %s not visible to the authorized account", channel_id)
    return ChannelInfoResponse(channel=channel)


__all__ = ["router"]
