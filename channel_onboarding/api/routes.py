"""
Router assembly and health checks.
"""

from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import APIRouter

from channel_onboarding.core.config import AppSettings
from channel_onboarding.dependencies import SettingsDependency

from .admin import router as admin_router
from .onboard import router as onboard_router

router = APIRouter()
health_router = APIRouter()


@health_router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(settings: AppSettings = SettingsDependency) -> dict:
    """Simple health endpoint for monitoring."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


router.include_router(health_router)
router.include_router(onboard_router)
router.include_router(admin_router)

__all__ = ["health_router", "router"]
