from __future__ import annotations

import httpx
import pytest

from channel_onboarding.clients import webhook
from channel_onboarding.clients.webhook import WebhookNotifier


def _patch_transport(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    real_client = httpx.AsyncClient

    def _client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(webhook.httpx, "AsyncClient", _client)


@pytest.mark.asyncio
async def test_notify_posts_json(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    _patch_transport(monkeypatch, handler)

    delivered = await WebhookNotifier("https://hooks.example/onboard").notify(
        {"clientId": "c-1", "channelId": "PLACEHOLDER"}
    )

    assert delivered is True
    assert seen[0].method == "POST"
    assert b'"clientId":"c-1"' in seen[0].content.replace(b" ", b"")


@pytest.mark.asyncio
async def test_notify_swallows_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_transport(monkeypatch, lambda request: httpx.Response(502))

    delivered = await WebhookNotifier("https://hooks.example/onboard").notify({"clientId": "c-1"})

    assert delivered is False
