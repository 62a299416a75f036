"""
Domain model for the persisted OAuth token set.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


def now_millis() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class Credential(BaseModel):
    """Token bundle stored in the credential file.

    Field names follow Google's token endpoint so the file stays readable by
    other Google tooling.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    scope: str = ""
    token_type: str = "Bearer"
    expiry_date: Optional[int] = Field(
        None, description="Access token expiry as epoch milliseconds."
    )

    @classmethod
    def from_token_response(
        cls,
        payload: Dict[str, Any],
        *,
        issued_at_millis: int,
        previous: Optional["Credential"] = None,
    ) -> "Credential":
        """Build a credential from a token endpoint response.

        Refresh responses usually omit ``refresh_token`` and sometimes
        ``scope``; those are carried over from ``previous``.
        """
        expires_in = payload.get("expires_in")
        expiry = (
            issued_at_millis + int(expires_in) * 1000 if expires_in is not None else None
        )
        return cls(
            access_token=payload.get("access_token"),
            refresh_token=payload.get("refresh_token")
            or (previous.refresh_token if previous else None),
            scope=payload.get("scope") or (previous.scope if previous else ""),
            token_type=payload.get("token_type") or "Bearer",
            expiry_date=expiry,
        )

    @property
    def expires_at(self) -> Optional[datetime]:
        if self.expiry_date is None:
            return None
        return datetime.fromtimestamp(self.expiry_date / 1000, tz=timezone.utc)

    def expires_within(self, window: timedelta, *, now_ms: Optional[int] = None) -> bool:
        """True when the expiry is known and falls inside ``window`` from now."""
        if self.expiry_date is None:
            return False
        current = now_ms if now_ms is not None else now_millis()
        return self.expiry_date - current < window.total_seconds() * 1000


__all__ = ["Credential", "now_millis"]
