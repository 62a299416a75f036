"""Domain model exports."""

from .channel import CHANNEL_ID_PATTERN, channel_url, is_valid_channel_id
from .client import (
    ChannelSetupResult,
    ChannelSetupUpdates,
    ClientRecord,
    ClientStatus,
    PostingFrequency,
)
from .credential import Credential, now_millis

__all__ = [
    "CHANNEL_ID_PATTERN",
    "ChannelSetupResult",
    "ChannelSetupUpdates",
    "ClientRecord",
    "ClientStatus",
    "Credential",
    "PostingFrequency",
    "channel_url",
    "is_valid_channel_id",
    "now_millis",
]
