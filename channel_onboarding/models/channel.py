"""YouTube channel identifiers and URLs."""

from __future__ import annotations

import re

CHANNEL_ID_PATTERN = re.compile(r"^UC[A-Za-z0-9_-]{22}$")
CHANNEL_URL_TEMPLATE = "https://youtube.com/channel/{channel_id}"


def is_valid_channel_id(channel_id: str) -> bool:
    """``UC`` followed by exactly 22 characters of ``[A-Za-z0-9_-]``."""
    return bool(CHANNEL_ID_PATTERN.fullmatch(channel_id or ""))


def channel_url(channel_id: str) -> str:
    return CHANNEL_URL_TEMPLATE.format(channel_id=channel_id)


__all__ = ["CHANNEL_ID_PATTERN", "channel_url", "is_valid_channel_id"]
