"""Schemas related to the admin OAuth flow."""

from __future__ import annotations

from pydantic import Field

from .base import CamelModel


class OAuthCallbackPayload(CamelModel):
    """Payload sent to complete the OAuth callback exchange."""

    code: str = Field(..., min_length=1, description="Authorization code returned by Google OAuth.")


class OAuthUrlResponse(CamelModel):
    auth_url: str


class OAuthCallbackResponse(CamelModel):
    success: bool = True
    message: str = "Authorization successful! You can now manage YouTube channels."


class OAuthStatusResponse(CamelModel):
    is_authorized: bool
    message: str


__all__ = [
    "OAuthCallbackPayload",
    "OAuthCallbackResponse",
    "OAuthStatusResponse",
    "OAuthUrlResponse",
]
