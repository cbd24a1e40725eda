"""Discord infrastructure providers."""

from dishka import Scope, provide

from outpost.adapter.discord import (
    DiscordBot,
    DiscordOAuthClient,
    RealDiscordBot,
    RealDiscordOAuthClient,
)
from outpost.config import Settings
from outpost.util.di.base import ProviderBase
from outpost.util.error import ConfigurationError


class DiscordProvider(ProviderBase):
    """Discord component base."""

    __mock_component__ = "discord"


class ProdDiscordProvider(DiscordProvider):
    """Production Discord provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_discord_oauth_client(self, settings: Settings) -> DiscordOAuthClient:
        """Provide Discord OAuth client.

        Raises:
            ConfigurationError: If Discord OAuth credentials are not configured
        """
        if not settings.discord.client_id:
            raise ConfigurationError("DISCORD__CLIENT_ID")
        if not settings.discord.client_secret:
            raise ConfigurationError("DISCORD__CLIENT_SECRET")

        return RealDiscordOAuthClient(
            client_id=settings.discord.client_id,
            client_secret=settings.discord.client_secret,
            redirect_uri=settings.auth.discord_callback_url,
            scopes=settings.discord.scopes,
        )

    @provide(scope=Scope.APP)
    def get_discord_bot(self, settings: Settings) -> DiscordBot:
        """Provide the process-wide bot presence (started by the app lifespan)."""
        return RealDiscordBot(token=settings.discord.bot_token)
