try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import asyncio

import pytest

from channel_onboarding.core.errors import StoreWriteError
from channel_onboarding.models import ClientStatus
from channel_onboarding.schemas import OnboardRequest
from channel_onboarding.services.intake import IntakeService
from channel_onboarding.services.record_store import SheetsClientRecordStore
from fakes import FakeSheetsClient


class RecordingNotifier:
    def __init__(self) -> None:
        self.payloads: list[dict] = []

    async def notify(self, payload: dict) -> bool:
        self.payloads.append(payload)
        return True


def _request(**overrides) -> OnboardRequest:
    values = dict(
        companyName="Acme",
        industry="Technology",
        mission="We make rockets and anvils for discerning desert hunters everywhere.",
        targetAudience="Coyotes",
        postingFrequency="weekly",
        email="a@b.com",
        phone="+1 (555) 010-0100",
    )
    values.update(overrides)
    return OnboardRequest(**values)


@pytest.mark.asyncio
async def test_onboard_appends_trial_row_on_placeholder_channel() -> None:
    sheets = FakeSheetsClient()
    store = SheetsClientRecordStore(sheets)
    notifier = RecordingNotifier()
    service = IntakeService(store, placeholder_channel_id="PLACEHOLDER", notifier=notifier)

    response = await service.onboard(_request())

    assert response.success is True
    assert response.channel_id == "PLACEHOLDER"
    assert response.channel_url == "https://www.youtube.com/channel/PLACEHOLDER"
    record = await store.fetch_record_by_id(response.client_id)
    assert record is not None
    assert record.status is ClientStatus.TRIAL
    assert record.company_name == "Acme"
    assert record.posting_frequency == "weekly"
    assert record.channel_title == "Acme"
    assert record.created_at is not None
    assert notifier.payloads == [
        {
            "clientId": response.client_id,
            "channelId": "PLACEHOLDER",
            "companyName": "Acme",
            "industry": "Technology",
        }
    ]


@pytest.mark.asyncio
async def test_concurrent_submissions_get_distinct_ids() -> None:
    store = SheetsClientRecordStore(FakeSheetsClient())
    service = IntakeService(store, placeholder_channel_id="PLACEHOLDER")

    responses = await asyncio.gather(*(service.onboard(_request()) for _ in range(25)))

    ids = [response.client_id for response in responses]
    assert len(set(ids)) == len(ids)
    records = await store.fetch_all_records()
    assert sorted(record.id for record in records) == sorted(ids)


@pytest.mark.asyncio
async def test_store_failure_skips_notification() -> None:
    sheets = FakeSheetsClient()
    sheets.fail_append = True
    notifier = RecordingNotifier()
    service = IntakeService(
        SheetsClientRecordStore(sheets), placeholder_channel_id="PLACEHOLDER", notifier=notifier
    )

    with pytest.raises(StoreWriteError):
        await service.onboard(_request())

    assert notifier.payloads == []
