"""YouTube Data API wrapper used for channel provisioning."""

from __future__ import annotations

import asyncio
import io
from typing import Any, Dict, Optional, TYPE_CHECKING

from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from channel_onboarding.services.credentials import CredentialSource


class YouTubeClient:
    """Update channel branding and upload channel assets."""

    def __init__(self, credential_source: "CredentialSource") -> None:
        self._credential_source = credential_source

    async def update_channel_branding(
        self, channel_id: str, channel_fields: Dict[str, Any]
    ) -> dict:
        """Replace ``brandingSettings.channel`` of the given channel."""
        credentials = await self._credential_source.get_credentials()

        def _execute_update() -> dict:
            service = build("youtube", "v3", credentials=credentials, cache_discovery=False)
            return (
                service.channels()
                .update(
                    part="brandingSettings",
                    body={
                        "id": channel_id,
                        "brandingSettings": {"channel": channel_fields},
                    },
                )
                .execute()
            )

        return await asyncio.to_thread(_execute_update)

    async def insert_channel_banner(self, image_bytes: bytes, mime_type: str) -> str:
        """Upload banner art and return the URL YouTube assigns to it."""
        credentials = await self._credential_source.get_credentials()

        def _execute_insert() -> str:
            service = build("youtube", "v3", credentials=credentials, cache_discovery=False)
            media = MediaIoBaseUpload(
                io.BytesIO(image_bytes), mimetype=mime_type, resumable=False
            )
            created = service.channelBanners().insert(media_body=media).execute()
            return created.get("url", "")

        return await asyncio.to_thread(_execute_insert)

    async def insert_video(
        self, metadata: Dict[str, Any], video_bytes: bytes, mime_type: str
    ) -> str:
        """Upload a video through a resumable session and return its id."""
        credentials = await self._credential_source.get_credentials()

        def _execute_insert() -> str:
            service = build("youtube", "v3", credentials=credentials, cache_discovery=False)
            media = MediaIoBaseUpload(
                io.BytesIO(video_bytes), mimetype=mime_type, chunksize=-1, resumable=True
            )
            request = service.videos().insert(
                part="snippet,status", body=metadata, media_body=media
            )
            response = None
            while response is None:
                _, response = request.next_chunk()
            return response["id"]

        return await asyncio.to_thread(_execute_insert)

    async def get_channel(self, channel_id: str) -> Optional[dict]:
        """Fetch snippet, branding and statistics for a channel, or None."""
        credentials = await self._credential_source.get_credentials()

        def _execute_list() -> Optional[dict]:
            service = build("youtube", "v3", credentials=credentials, cache_discovery=False)
            response = (
                service.channels()
                .list(part="snippet,brandingSettings,statistics", id=channel_id)
                .execute()
            )
            items = response.get("items") or []
            return items[0] if items else None

        return await asyncio.to_thread(_execute_list)


__all__ = ["YouTubeClient"]
