"""
FastAPI application entrypoint for the client onboarding service.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from channel_onboarding import __version__
from channel_onboarding.api import health_router, router as api_router
from channel_onboarding.core.config import get_settings
from channel_onboarding.core.errors import OnboardingError
from channel_onboarding.core.logging import configure_logging

logger = logging.getLogger(__name__)


async def onboarding_error_handler(request: Request, exc: OnboardingError) -> JSONResponse:
    if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing or malformed input is the caller's problem: answer 400, not 422."""
    errors = exc.errors()
    logger.info("Validation error for %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"detail": jsonable_encoder(errors)},
    )


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Client Onboarding",
        version=__version__,
        description="Client intake, YouTube channel provisioning and admin dashboard API.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(OnboardingError, onboarding_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
