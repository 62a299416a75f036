"""Outbound notification to an external workflow engine."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """Fire-and-forget JSON POST; failures are logged, never raised."""

    def __init__(self, url: str, *, timeout: float = 10.0) -> None:
        self._url = url
        self._timeout = timeout

    async def notify(self, payload: Dict[str, Any]) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Webhook notification to %s failed: %s", self._url, exc)
            return False
        logger.info("Webhook notified for client %s", payload.get("clientId"))
        return True


__all__ = ["WebhookNotifier"]
