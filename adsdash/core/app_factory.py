"""Application factory for the FastAPI app."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import AsyncIterator

from fastapi import FastAPI

from adsdash.api.routes import errors_router, health_router
from adsdash.core.config import settings
from adsdash.core.exception_handlers import setup_exception_handlers
from adsdash.core.logging import configure_logging
from adsdash.core.middleware import request_id_middleware
from adsdash.core.rate_limit import run_periodic_cleanup

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {
        "name": "Errors",
        "description": "Client error reporting and the development-only error log.",
    },
    {
        "name": "Health",
        "description": "Liveness checks.",
    },
]


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the rate limiter sweep for the lifetime of the app."""
    cleanup_task = asyncio.create_task(
        run_periodic_cleanup(
            settings.app.rate_limit_cleanup_interval_seconds,
            settings.app.rate_limit_max_age_seconds,
        )
    )
    app.state.rate_limit_cleanup_task = cleanup_task
    logger.info(
        "app.startup",
        extra={
            "environment": settings.app_env,
            "rate_limit_cleanup_interval_s": settings.app.rate_limit_cleanup_interval_seconds,
        },
    )
    try:
        yield
    finally:
        cleanup_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await cleanup_task
        logger.info("app.shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        App with logging, middleware, exception handlers and routers wired.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Ads Dashboard API",
        description=(
            "Operational endpoints for the Google Ads dashboard: client error "
            "reporting with a development-only read view, behind per-route "
            "rate limits."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(errors_router, prefix="/v1")
    app.include_router(health_router)

    return app
