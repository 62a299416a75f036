"""
Error taxonomy shared by the service layer and the HTTP surface.

Every error carries the HTTP status the API answers with; the exception
handler registered in ``channel_onboarding.main`` renders them.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from channel_onboarding.models import ChannelSetupResult


class OnboardingError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_payload(self) -> Dict[str, Any]:
        return {"detail": self.message}


class ValidationError(OnboardingError):
    """Missing or malformed input the caller can correct."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Invalid request"


class InvalidStatusTransitionError(ValidationError):
    """Raised when a client status would move backwards."""


class NotFoundError(OnboardingError):
    """A referenced client or channel does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = "Not found"


class CredentialError(OnboardingError):
    """Base class for credential lifecycle failures."""

    default_message = "Credential failure"


class UnauthorizedError(CredentialError):
    """No access token has ever been obtained."""

    default_message = "Not authorized. Please complete OAuth2 flow first."


class AuthExchangeError(CredentialError):
    """The authorization server rejected the one-time code."""

    default_message = "Failed to authorize with Google"


class RefreshError(CredentialError):
    """The stored refresh token could not be exchanged."""

    default_message = "Failed to refresh access token"


class StoreError(OnboardingError):
    """Base class for remote tabular store failures."""

    default_message = "Record store failure"


class StoreReadError(StoreError):
    default_message = "Failed to read client records"


class StoreWriteError(StoreError):
    default_message = "Failed to write client record"


class RecordNotFoundError(StoreError):
    """No row carries the requested client id."""

    default_message = "Client not found"


class ProvisioningError(OnboardingError):
    """A channel setup step failed; ``result`` holds what was applied before it."""

    default_message = "Failed to setup channel"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        step: str,
        result: Optional["ChannelSetupResult"] = None,
    ) -> None:
        super().__init__(message)
        self.step = step
        self.result = result

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["step"] = self.step
        if self.result is not None:
            payload["channelId"] = self.result.channel_id
            payload["updates"] = self.result.updates.model_dump()
        return payload


__all__ = [
    "AuthExchangeError",
    "CredentialError",
    "InvalidStatusTransitionError",
    "NotFoundError",
    "OnboardingError",
    "ProvisioningError",
    "RecordNotFoundError",
    "RefreshError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "UnauthorizedError",
    "ValidationError",
]
