"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from typing import Callable

from outpost.domain.value import DiscordId, DiscordProfile, SteamId, SteamProfile

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_steam_profile(n: int = 1, name: str | None = None) -> SteamProfile:
    """Steam profile with a deterministic SteamID64 derived from ``n``."""
    steam_id = str(76561198000000000 + n)
    return SteamProfile(
        steam_id=SteamId(steam_id),
        display_name=name or f"survivor{n}",
        avatar_url=f"https://avatars.steamstatic.com/{n}.jpg",
        profile_url=f"https://steamcommunity.com/profiles/{steam_id}/",
    )


def make_discord_profile(
    n: int = 1, username: str | None = None, discriminator: str = "0001"
) -> DiscordProfile:
    """Discord profile with a deterministic snowflake derived from ``n``."""
    return DiscordProfile(
        discord_id=DiscordId(str(100000000000000000 + n)),
        username=username or f"player{n}",
        discriminator=discriminator,
        avatar=f"avatarhash{n}",
        email=f"player{n}@example.com",
    )


def ticking_clock(start: datetime = BASE_TIME) -> Callable[[], datetime]:
    """Clock that advances one second on every call."""
    current = [start - timedelta(seconds=1)]

    def _now() -> datetime:
        current[0] += timedelta(seconds=1)
        return current[0]

    return _now
