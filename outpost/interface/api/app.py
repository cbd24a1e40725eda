"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from outpost.adapter.discord import DiscordBot
from outpost.config import APP_VERSION, Settings
from outpost.interface.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware
from outpost.interface.api.routes import api, auth, health
from outpost.util.di.container import create_container, setup_di
from outpost.util.observability import instrument_fastapi, instrument_httpx

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the Discord bot presence and close the container on shutdown."""
    container: AsyncContainer = app.state.dishka_container
    discord_bot = await container.get(DiscordBot)
    await discord_bot.start()
    logger.info(f"Discord bot status: {discord_bot.status}")
    try:
        yield
    finally:
        await discord_bot.stop()
        await container.close()
        logger.info("Application shut down")


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as ``{"error": ...}``."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        detail = "Route not found"
    else:
        detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide internal failures behind a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function;
    scripts/start_app.py does so in production.

    Args:
        container: DI container to use; the production container by default
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="Outpost API",
        description="Backend API for a DayZ community: Steam and Discord "
        "account linking plus game server status",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    # Last added runs first: CORS answers preflights before rate limiting
    app_instance.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit.max_requests,
        window_seconds=settings.rate_limit.window_seconds,
    )
    app_instance.add_middleware(SecurityHeadersMiddleware)
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3001",
            "http://127.0.0.1:3001",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app_instance.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app_instance.add_exception_handler(Exception, unhandled_exception_handler)

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(api.router)

    return app_instance
