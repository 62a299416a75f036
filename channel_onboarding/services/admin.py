"""
Admin dashboard operations: listing clients and completing channel setup.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from channel_onboarding.core.errors import NotFoundError, ValidationError
from channel_onboarding.models import ClientRecord, ClientStatus, is_valid_channel_id
from channel_onboarding.schemas import DashboardChannel, SetupChannelResponse
from channel_onboarding.services.provisioning import (
    ChannelProvisioningService,
    ChannelSetupRequest,
)
from channel_onboarding.services.record_store import ClientRecordRepository

logger = logging.getLogger(__name__)


class AdminChannelService:
    """Glue between the client sheet and the provisioning run."""

    def __init__(
        self,
        record_store: ClientRecordRepository,
        provisioning: ChannelProvisioningService,
        *,
        placeholder_channel_id: str,
    ) -> None:
        self._records = record_store
        self._provisioning = provisioning
        self._placeholder_channel_id = placeholder_channel_id

    def has_attached_channel(self, record: ClientRecord) -> bool:
        """A real channel is attached once the row points past the placeholder."""
        return bool(record.channel_id) and record.channel_id != self._placeholder_channel_id

    def to_dashboard_channel(self, record: ClientRecord) -> DashboardChannel:
        attached = self.has_attached_channel(record)
        created_at = record.created_at or datetime.now(timezone.utc)
        return DashboardChannel(
            id=record.id,
            company_name=record.company_name,
            industry=record.industry,
            channel_name=record.channel_name or f"{record.company_name} Marketing",
            description=record.generated_description or record.mission,
            keywords=record.keywords,
            banner_url=record.banner_url,
            trailer_url=record.trailer_url,
            status=ClientStatus.COMPLETED if attached else record.status,
            created_at=created_at.isoformat(),
            youtube_channel_id=record.channel_id if attached else None,
        )

    async def list_channels(self) -> List[DashboardChannel]:
        records = await self._records.fetch_all_records()
        return [self.to_dashboard_channel(record) for record in records]

    async def setup_channel(
        self, *, client_id: str, youtube_channel_id: str
    ) -> SetupChannelResponse:
        if not is_valid_channel_id(youtube_channel_id):
            raise ValidationError("Invalid YouTube channel ID format")

        record = await self._records.fetch_record_by_id(client_id)
        if record is None:
            raise NotFoundError("Client not found")

        if record.status.can_transition_to(ClientStatus.PROCESSING):
            await self._records.update_record_fields(
                client_id, {"status": ClientStatus.PROCESSING}
            )

        result = await self._provisioning.setup_channel(
            ChannelSetupRequest(
                channel_id=youtube_channel_id,
                title=record.channel_name or record.company_name,
                description=record.generated_description or record.mission,
                keywords=record.keywords,
                banner_url=record.banner_url or None,
                trailer_url=record.trailer_url or None,
            )
        )

        await self._records.update_record_fields(
            client_id,
            {
                "channel_id": youtube_channel_id,
                "channel_url": result.channel_url,
                "status": ClientStatus.COMPLETED,
                "setup_completed_at": datetime.now(timezone.utc),
            },
        )
        logger.info("Client %s attached to channel %s", client_id, youtube_channel_id)

        return SetupChannelResponse(
            success=result.success,
            channel_id=youtube_channel_id,
            channel_url=result.channel_url,
            updates=result.updates,
        )


__all__ = ["AdminChannelService"]
