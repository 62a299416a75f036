"""
Pydantic models for the public onboarding form.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from channel_onboarding.models import PostingFrequency

from .base import CamelModel

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PHONE_PATTERN = r"^[\d\s\-+()]+$"


class OnboardRequest(CamelModel):
    """Intake form submitted by a prospective client."""

    company_name: str = Field(..., min_length=1)
    industry: str = Field(..., min_length=1)
    mission: str = Field("", description="Company mission and description.")
    target_audience: str = ""
    posting_frequency: PostingFrequency = PostingFrequency.DAILY
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)

    @field_validator("phone", mode="before")
    @classmethod
    def _blank_phone(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class OnboardResponse(CamelModel):
    """Returned once the placeholder channel and sheet row exist."""

    success: bool = True
    client_id: str
    channel_url: str
    channel_id: str
    message: str = "Channel created successfully. Check your email for next steps!"


__all__ = ["OnboardRequest", "OnboardResponse"]
