try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timezone

import httpx
import pytest

from channel_onboarding.main import app
from channel_onboarding.models import ClientRecord, ClientStatus
from channel_onboarding.services import (
    AdminChannelService,
    ChannelProvisioningService,
    SheetsClientRecordStore,
)
from channel_onboarding.services.record_store import record_to_row
from fakes import FakeSheetsClient, FakeYouTubeClient, StubCredentialManager

PLACEHOLDER = "PLACEHOLDER_CHANNEL_ID"
CHANNEL_ID = "UC" + "Zz9_-Yy8Xx7Ww6Vv5Uu4Tt"

pytestmark = pytest.mark.anyio("asyncio")


def _row(client_id: str, **overrides) -> list[str]:
    values = dict(
        id=client_id,
        company_name="Globex",
        industry="Energy",
        mission="Clean power for the hemisphere.",
        email="ops@globex.test",
        channel_id=PLACEHOLDER,
        channel_url=f"https://www.youtube.com/channel/{PLACEHOLDER}",
        status=ClientStatus.TRIAL,
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return record_to_row(ClientRecord(**values))


class Harness:
    def __init__(self, rows, *, youtube: FakeYouTubeClient, authorized: bool = True) -> None:
        self.sheets = FakeSheetsClient(rows)
        self.store = SheetsClientRecordStore(self.sheets)
        self.youtube = youtube
        self.credentials = StubCredentialManager(authorized=authorized)
        self.provisioning = ChannelProvisioningService(self.youtube, self.credentials)

    def install(self) -> None:
        from channel_onboarding import dependencies

        app.dependency_overrides.clear()
        app.dependency_overrides.update(
            {
                dependencies.get_admin_channel_service: lambda: AdminChannelService(
                    self.store, self.provisioning, placeholder_channel_id=PLACEHOLDER
                ),
                dependencies.get_provisioning_service: lambda: self.provisioning,
                dependencies.get_credential_manager: lambda: self.credentials,
            }
        )


@pytest.fixture()
def harness_factory():
    def _build(rows=(), *, fail_on=None, authorized=True) -> Harness:
        harness = Harness(
            list(rows), youtube=FakeYouTubeClient(fail_on=fail_on), authorized=authorized
        )
        harness.install()
        return harness

    yield _build

    app.dependency_overrides.clear()


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    )


async def test_pending_channels_shapes_rows_for_dashboard(harness_factory) -> None:
    harness_factory(
        [
            _row("c-1", keywords=["solar", "grid storage"], channel_name="Globex Power"),
            _row("c-2", channel_id=CHANNEL_ID, status=ClientStatus.PROCESSING),
            ["", "orphaned cell"],
        ]
    )

    async with _client() as client:
        response = await client.get("/api/admin/pending-channels")

    assert response.status_code == 200
    first, second = response.json()["channels"]
    assert first["channelName"] == "Globex Power"
    assert first["keywords"] == ["solar", "grid storage"]
    assert first["status"] == "trial"
    assert first["createdAt"] == "2024-05-01T12:00:00+00:00"
    assert first["youtubeChannelId"] is None
    assert second["status"] == "completed"
    assert second["youtubeChannelId"] == CHANNEL_ID


async def test_pending_channels_read_failure_is_500(harness_factory) -> None:
    harness = harness_factory([_row("c-1")])
    harness.sheets.fail_get = True

    async with _client() as client:
        response = await client.get("/api/admin/pending-channels")

    assert response.status_code == 500
    assert response.json()["detail"].startswith("Failed to read clients")


@pytest.mark.parametrize(
    "channel_id",
    ["UCabcdefghijklmnopqrstu", "XX" + "a" * 22, "UC" + "a" * 21 + "!", ""],
)
async def test_setup_channel_rejects_malformed_channel_id(harness_factory, channel_id) -> None:
    harness = harness_factory([_row("c-1")])

    async with _client() as client:
        response = await client.post(
            "/api/admin/setup-channel",
            json={"clientId": "c-1", "youtubeChannelId": channel_id},
        )

    assert response.status_code == 400
    assert harness.youtube.call_count == 0
    assert harness.credentials.ensure_calls == 0
    assert harness.sheets.update_ranges == []


async def test_setup_channel_requires_client_id(harness_factory) -> None:
    harness_factory([_row("c-1")])

    async with _client() as client:
        response = await client.post(
            "/api/admin/setup-channel", json={"youtubeChannelId": CHANNEL_ID}
        )

    assert response.status_code == 400


async def test_setup_channel_unknown_client_is_404(harness_factory) -> None:
    harness = harness_factory([_row("c-1")])

    async with _client() as client:
        response = await client.post(
            "/api/admin/setup-channel",
            json={"clientId": "missing", "youtubeChannelId": CHANNEL_ID},
        )

    assert response.status_code == 404
    assert response.json() == {"detail": "Client not found"}
    assert harness.youtube.call_count == 0


async def test_setup_channel_provisions_banner_and_trailer(harness_factory) -> None:
    harness = harness_factory(
        [
            _row(
                "c-1",
                generated_description="Powering tomorrow.",
                keywords=["solar"],
                banner_url="https://cdn.example/banner.png",
                trailer_url="https://cdn.example/trailer.mp4",
            )
        ]
    )

    async def fetch(url, *, default_mime_type, timeout):
        from channel_onboarding.utils.http import DownloadedMedia

        return DownloadedMedia(content=url.encode(), mime_type=default_mime_type)

    harness.provisioning._fetch_media = fetch

    async with _client() as client:
        response = await client.post(
            "/api/admin/setup-channel",
            json={"clientId": "c-1", "youtubeChannelId": CHANNEL_ID},
        )

    assert response.status_code == 200
    assert response.json()["updates"] == {
        "description": True,
        "keywords": True,
        "banner": True,
        "trailer": True,
    }
    assert harness.youtube.branding_updates[0][1]["description"] == "Powering tomorrow."
    assert harness.youtube.banners == [(b"https://cdn.example/banner.png", "image/png")]
    record = await harness.store.fetch_record_by_id("c-1")
    assert record.status is ClientStatus.COMPLETED
    assert record.channel_id == CHANNEL_ID
    assert record.channel_url == f"https://youtube.com/channel/{CHANNEL_ID}"


async def test_setup_channel_failure_reports_step_and_keeps_processing(harness_factory) -> None:
    harness = harness_factory(
        [_row("c-1", banner_url="https://cdn.example/banner.png")],
        fail_on="update_channel_branding",
    )

    async with _client() as client:
        response = await client.post(
            "/api/admin/setup-channel",
            json={"clientId": "c-1", "youtubeChannelId": CHANNEL_ID},
        )

    assert response.status_code == 500
    body = response.json()
    assert body["step"] == "metadata"
    assert body["channelId"] == CHANNEL_ID
    assert body["updates"] == {
        "description": False,
        "keywords": False,
        "banner": False,
        "trailer": False,
    }
    record = await harness.store.fetch_record_by_id("c-1")
    assert record.status is ClientStatus.PROCESSING
    assert record.channel_id == PLACEHOLDER


async def test_setup_channel_without_authorization(harness_factory) -> None:
    harness = harness_factory([_row("c-1")], authorized=False)

    async with _client() as client:
        response = await client.post(
            "/api/admin/setup-channel",
            json={"clientId": "c-1", "youtubeChannelId": CHANNEL_ID},
        )

    assert response.status_code == 500
    assert response.json() == {"detail": "Not authorized. Please complete OAuth2 flow first."}
    assert harness.youtube.call_count == 0


async def test_channel_info_returns_channel_or_null(harness_factory) -> None:
    harness = harness_factory()
    harness.youtube.channels[CHANNEL_ID] = {
        "id": CHANNEL_ID,
        "snippet": {"title": "Globex"},
        "statistics": {"subscriberCount": "12"},
    }

    async with _client() as client:
        found = await client.get(f"/api/admin/channel/{CHANNEL_ID}")
        missing = await client.get("/api/admin/channel/UCunknown")

    assert found.status_code == 200
    assert found.json()["channel"]["snippet"]["title"] == "Globex"
    assert missing.status_code == 200
    assert missing.json() == {"channel": None}


async def test_channel_info_remote_failure_is_500(harness_factory) -> None:
    harness_factory(fail_on="get_channel")

    async with _client() as client:
        response = await client.get(f"/api/admin/channel/{CHANNEL_ID}")

    assert response.status_code == 500
    assert response.json()["step"] == "channel_info"


async def test_hand_edited_row_does_not_break_dashboard_or_setup(harness_factory) -> None:
    edited = _row("c-2")
    edited[15] = "Active"
    edited[17] = "5/1/2024 12:00:00"
    harness = harness_factory([_row("c-1"), edited])

    async with _client() as client:
        listing = await client.get("/api/admin/pending-channels")
        setup = await client.post(
            "/api/admin/setup-channel",
            json={"clientId": "c-1", "youtubeChannelId": CHANNEL_ID},
        )

    assert listing.status_code == 200
    statuses = {channel["id"]: channel["status"] for channel in listing.json()["channels"]}
    assert statuses == {"c-1": "trial", "c-2": "pending"}
    assert setup.status_code == 200
    record = await harness.store.fetch_record_by_id("c-1")
    assert record.status is ClientStatus.COMPLETED
