"""
Business logic for the public onboarding form.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from channel_onboarding.clients.webhook import WebhookNotifier
from channel_onboarding.models import ClientRecord, ClientStatus
from channel_onboarding.schemas import OnboardRequest, OnboardResponse
from channel_onboarding.services.record_store import ClientRecordRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaceholderChannel:
    channel_id: str
    title: str
    url: str


class IntakeService:
    """Create the placeholder channel and client row for a new submission.

    YouTube does not let the API create channels, so every client starts on a
    shared placeholder channel until an admin attaches a real one.
    """

    def __init__(
        self,
        record_store: ClientRecordRepository,
        *,
        placeholder_channel_id: str,
        notifier: Optional[WebhookNotifier] = None,
    ) -> None:
        self._records = record_store
        self._placeholder_channel_id = placeholder_channel_id
        self._notifier = notifier

    def create_placeholder_channel(self, company_name: str) -> PlaceholderChannel:
        channel_id = self._placeholder_channel_id
        return PlaceholderChannel(
            channel_id=channel_id,
            title=company_name,
            url=f"https://www.youtube.com/channel/{channel_id}",
        )

    async def onboard(self, request: OnboardRequest) -> OnboardResponse:
        logger.info("New onboarding request: %s", request.company_name)
        channel = self.create_placeholder_channel(request.company_name)

        client_id = str(uuid.uuid4())
        record = ClientRecord(
            id=client_id,
            company_name=request.company_name,
            industry=request.industry,
            mission=request.mission,
            target_audience=request.target_audience,
            posting_frequency=request.posting_frequency.value,
            email=request.email,
            phone=request.phone or "",
            channel_id=channel.channel_id,
            channel_title=channel.title,
            channel_url=channel.url,
            status=ClientStatus.TRIAL,
            created_at=datetime.now(timezone.utc),
        )
        await self._records.append_record(record)

        if self._notifier is not None:
            await self._notifier.notify(
                {
                    "clientId": client_id,
                    "channelId": channel.channel_id,
                    "companyName": request.company_name,
                    "industry": request.industry,
                }
            )

        return OnboardResponse(
            client_id=client_id,
            channel_url=channel.url,
            channel_id=channel.channel_id,
        )


__all__ = ["IntakeService", "PlaceholderChannel"]
