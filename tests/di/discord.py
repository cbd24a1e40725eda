"""Mock Discord providers for testing."""

from dishka import Scope, provide

from outpost.adapter.discord import (
    DiscordBot,
    DiscordOAuthClient,
    MockDiscordBot,
    MockDiscordOAuthClient,
)
from outpost.util.di.infrastructure.discord import DiscordProvider


class MockDiscordProvider(DiscordProvider):
    """Mock Discord provider: canned OAuth profile, always-ready bot."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_discord_oauth_client(self) -> DiscordOAuthClient:
        """Provide mock Discord OAuth client."""
        return MockDiscordOAuthClient()

    @provide(scope=Scope.APP)
    def get_discord_bot(self) -> DiscordBot:
        """Provide mock bot presence."""
        return MockDiscordBot()
