"""
Channel provisioning: apply a client's assets to a manually created channel.

A run is strictly sequential: branding metadata, then the optional banner,
then the optional trailer. The first failing step stops the run and raises
:class:`ProvisioningError` carrying the flags gathered so far.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from channel_onboarding.clients.youtube import YouTubeClient
from channel_onboarding.core.errors import ProvisioningError
from channel_onboarding.models import ChannelSetupResult, channel_url
from channel_onboarding.services.credentials import CredentialManager
from channel_onboarding.utils.http import DownloadedMedia, download_media

logger = logging.getLogger(__name__)

_MAX_DESCRIPTION_LENGTH = 1000
_TRAILER_CATEGORY_ID = "22"  # People & Blogs
_REMOTE_ERRORS = (HttpError, GoogleAuthError, httpx.HTTPError, OSError)

MediaFetcher = Callable[..., Awaitable[DownloadedMedia]]


def format_keywords(keywords: List[str]) -> str:
    """Channel keywords are space separated; multi-word entries get quoted."""
    rendered = []
    for keyword in keywords:
        keyword = keyword.strip().replace('"', "")
        if not keyword:
            continue
        rendered.append(f'"{keyword}"' if " " in keyword else keyword)
    return " ".join(rendered)


@dataclass
class ChannelSetupRequest:
    channel_id: str
    title: str
    description: str
    keywords: List[str] = field(default_factory=list)
    banner_url: Optional[str] = None
    trailer_url: Optional[str] = None


class ChannelProvisioningService:
    """Run the metadata / banner / trailer sequence against one channel."""

    def __init__(
        self,
        youtube_client: YouTubeClient,
        credential_manager: CredentialManager,
        *,
        media_fetcher: MediaFetcher = download_media,
        download_timeout: float = 30.0,
    ) -> None:
        self._youtube = youtube_client
        self._credentials = credential_manager
        self._fetch_media = media_fetcher
        self._download_timeout = download_timeout

    async def setup_channel(self, request: ChannelSetupRequest) -> ChannelSetupResult:
        await self._credentials.ensure_valid_token()

        result = ChannelSetupResult(
            channel_id=request.channel_id,
            channel_url=channel_url(request.channel_id),
        )
        branding = self._branding_fields(request)

        await self._run_step(
            "metadata",
            result,
            self._youtube.update_channel_branding(request.channel_id, branding),
        )
        result.updates.description = True
        result.updates.keywords = True
        logger.info("Updated channel metadata for %s", request.channel_id)

        if request.banner_url:
            await self._run_step("banner", result, self._upload_banner(request.banner_url))
            result.updates.banner = True
            logger.info("Uploaded channel banner for %s", request.channel_id)

        if request.trailer_url:
            await self._run_step("trailer", result, self._install_trailer(request, branding))
            result.updates.trailer = True
            logger.info("Set channel trailer for %s", request.channel_id)

        result.success = True
        logger.info("Channel setup completed: %s", request.channel_id)
        return result

    async def get_channel_info(self, channel_id: str) -> Optional[dict]:
        await self._credentials.ensure_valid_token()
        try:
            return await self._youtube.get_channel(channel_id)
        except _REMOTE_ERRORS as exc:
            logger.error("Error getting channel info for %s: %s", channel_id, exc)
            raise ProvisioningError(
                f"Failed to fetch channel information: {exc}", step="channel_info"
            ) from exc

    async def _run_step(
        self, step: str, result: ChannelSetupResult, operation: Awaitable[Any]
    ) -> Any:
        try:
            return await operation
        except _REMOTE_ERRORS as exc:
            logger.error(
                "Channel setup step %s failed for %s: %s", step, result.channel_id, exc
            )
            raise ProvisioningError(
                f"Channel setup failed at {step}: {exc}", step=step, result=result
            ) from exc

    @staticmethod
    def _branding_fields(request: ChannelSetupRequest) -> Dict[str, Any]:
        return {
            "description": request.description[:_MAX_DESCRIPTION_LENGTH],
            "keywords": format_keywords(request.keywords),
        }

    async def _upload_banner(self, banner_url: str) -> str:
        media = await self._fetch_media(
            banner_url, default_mime_type="image/png", timeout=self._download_timeout
        )
        return await self._youtube.insert_channel_banner(media.content, media.mime_type)

    async def _install_trailer(
        self, request: ChannelSetupRequest, branding: Dict[str, Any]
    ) -> str:
        media = await self._fetch_media(
            request.trailer_url, default_mime_type="video/mp4", timeout=self._download_timeout
        )
        metadata = {
            "snippet": {
                "title": f"{request.title} - Channel Trailer",
                "description": branding["description"],
                "tags": list(request.keywords),
                "categoryId": _TRAILER_CATEGORY_ID,
            },
            "status": {"privacyStatus": "public"},
        }
        video_id = await self._youtube.insert_video(metadata, media.content, media.mime_type)
        logger.info("Uploaded trailer video %s for %s", video_id, request.channel_id)
        # The branding update replaces the whole block, so resend description/keywords.
        await self._youtube.update_channel_branding(
            request.channel_id, {**branding, "unsubscribedTrailer": video_id}
        )
        return video_id


__all__ = [
    "ChannelProvisioningService",
    "ChannelSetupRequest",
    "format_keywords",
]
