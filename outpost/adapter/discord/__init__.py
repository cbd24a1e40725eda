"""Discord OAuth and bot adapter."""

from .bot import DiscordBot, MockDiscordBot, RealDiscordBot
from .oauth import (
    DiscordOAuthClient,
    DiscordOAuthError,
    MockDiscordOAuthClient,
    RealDiscordOAuthClient,
)

__all__ = [
    "DiscordBot",
    "RealDiscordBot",
    "MockDiscordBot",
    "DiscordOAuthClient",
    "RealDiscordOAuthClient",
    "MockDiscordOAuthClient",
    "DiscordOAuthError",
]
