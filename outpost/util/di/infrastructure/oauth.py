"""Login client aggregation for multi-provider authentication."""

from dishka import Scope, provide

from outpost.adapter.discord import DiscordOAuthClient
from outpost.adapter.steam import SteamOpenIDClient
from outpost.domain.service.auth_service import OAuthClient
from outpost.domain.value import AuthProvider
from outpost.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that maps each AuthProvider to its login client."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        steam_client: SteamOpenIDClient,
        discord_client: DiscordOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of login clients by provider."""
        return {
            AuthProvider.STEAM: steam_client,
            AuthProvider.DISCORD: discord_client,
        }
