"""HTTP helpers for pulling remote media assets."""

from __future__ import annotations

from typing import NamedTuple

import httpx


class DownloadedMedia(NamedTuple):
    content: bytes
    mime_type: str


async def download_media(
    url: str,
    *,
    default_mime_type: str,
    timeout: float = 30.0,
) -> DownloadedMedia:
    """Fetch ``url`` into memory.

    The response ``Content-Type`` wins over ``default_mime_type`` unless it is
    missing or generic. Raises ``httpx.HTTPError`` on transport failures and
    non-2xx answers; there is no retry.
    """
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url)
        response.raise_for_status()

    content_type = response.headers.get("content-type", "").split(";")[0].strip()
    if not content_type or content_type == "application/octet-stream":
        content_type = default_mime_type
    return DownloadedMedia(content=response.content, mime_type=content_type)


__all__ = ["DownloadedMedia", "download_media"]
