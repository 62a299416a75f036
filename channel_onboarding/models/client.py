"""
Domain models for onboarded clients and channel setup runs.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ClientStatus(str, Enum):
    """Lifecycle of a client row. Moves forward only."""

    PENDING = "pending"
    TRIAL = "trial"
    PROCESSING = "processing"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    def can_transition_to(self, target: "ClientStatus") -> bool:
        return target.rank >= self.rank


_STATUS_RANK = {
    ClientStatus.PENDING: 0,
    ClientStatus.TRIAL: 0,
    ClientStatus.PROCESSING: 1,
    ClientStatus.COMPLETED: 2,
}


class PostingFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"


_TIMESTAMP = TypeAdapter(datetime)


class ClientRecord(BaseModel):
    """One onboarding submission plus its channel provisioning state."""

    id: str = Field(..., min_length=1, description="Assigned once at intake.")
    company_name: str = ""
    industry: str = ""
    mission: str = ""
    target_audience: str = ""
    posting_frequency: str = ""
    email: str = ""
    phone: str = ""
    channel_id: str = ""
    channel_title: str = ""
    channel_url: str = ""
    generated_description: str = ""
    keywords: List[str] = Field(default_factory=list)
    banner_url: str = ""
    trailer_url: str = ""
    channel_name: str = ""
    status: ClientStatus = ClientStatus.PENDING
    created_at: Optional[datetime] = None
    setup_completed_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        """Blank or unrecognised cells (hand edits such as "Active") read as pending."""
        if isinstance(value, ClientStatus):
            return value
        text = str(value or "").strip().lower()
        if not text:
            return ClientStatus.PENDING
        try:
            return ClientStatus(text)
        except ValueError:
            logger.warning("Unknown client status %r; treating it as pending", value)
            return ClientStatus.PENDING

    @field_validator("created_at", "setup_completed_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value):
        """Blank or non-ISO cells (Sheets display dates) read as missing."""
        if not isinstance(value, str):
            return value
        text = value.strip()
        if not text:
            return None
        try:
            return _TIMESTAMP.validate_python(text)
        except ValidationError:
            logger.warning("Unparseable timestamp %r; treating it as missing", value)
            return None

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [keyword.strip() for keyword in value.split(",") if keyword.strip()]
        return value


class ChannelSetupUpdates(BaseModel):
    """Which assets a provisioning run actually applied."""

    description: bool = False
    keywords: bool = False
    banner: bool = False
    trailer: bool = False


class ChannelSetupResult(BaseModel):
    """Outcome of one provisioning run against a single channel."""

    channel_id: str
    channel_url: str
    success: bool = False
    updates: ChannelSetupUpdates = Field(default_factory=ChannelSetupUpdates)


__all__ = [
    "ChannelSetupResult",
    "ChannelSetupUpdates",
    "ClientRecord",
    "ClientStatus",
    "PostingFrequency",
]
