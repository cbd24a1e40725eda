"""Health check and banner routes."""

import time
from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from outpost.adapter.discord import DiscordBot
from outpost.config import APP_VERSION, Settings
from outpost.persistence.database import DatabaseProbe

router = APIRouter(tags=["health"], route_class=DishkaRoute)

_PROCESS_STARTED = time.monotonic()


class BannerResponse(BaseModel):
    """Service banner."""

    message: str
    status: str
    timestamp: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    uptime: float  # Seconds since the process started
    environment: str
    database: str  # "connected" or "disconnected"
    discord: str  # "ready" or "not ready"
    port: int
    version: str
    git_sha: str


@router.get("/", response_model=BannerResponse)
async def banner() -> BannerResponse:
    """Identify the service."""
    return BannerResponse(
        message="Outpost API - DayZ community backend",
        status="running",
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    database: FromDishka[DatabaseProbe],
    discord_bot: FromDishka[DiscordBot],
) -> HealthResponse:
    """Report liveness plus database and Discord bot status.

    Always answers 200; dependency states are informational.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _PROCESS_STARTED, 3),
        environment=settings.environment,
        database=await database.status(),
        discord=discord_bot.status,
        port=settings.port,
        version=APP_VERSION,
        git_sha=settings.git_sha,
    )
