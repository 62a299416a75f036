"""
Public onboarding endpoint.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends

from channel_onboarding.dependencies import get_intake_service
from channel_onboarding.schemas import OnboardRequest, OnboardResponse
from channel_onboarding.services import IntakeService

router = APIRouter(prefix="/onboard", tags=["onboarding"])


@router.post("", response_model=OnboardResponse, status_code=HTTPStatus.OK)
async def onboard_client(
    payload: OnboardRequest,
    service: Annotated[IntakeService, Depends(get_intake_service)],
) -> OnboardResponse:
    """Register a client on the placeholder channel and record the intake row."""
    return await service.onboard(payload)


__all__ = ["router"]
