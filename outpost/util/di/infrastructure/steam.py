"""Steam infrastructure providers."""

from dishka import Scope, provide

from outpost.adapter.steam import RealSteamOpenIDClient, SteamOpenIDClient
from outpost.config import Settings
from outpost.util.di.base import ProviderBase


class SteamProvider(ProviderBase):
    """Steam component base."""

    __mock_component__ = "steam"


class ProdSteamProvider(SteamProvider):
    """Production Steam provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_steam_openid_client(self, settings: Settings) -> SteamOpenIDClient:
        """Provide Steam OpenID client.

        The realm and return URL are derived from the API base URL.
        """
        return RealSteamOpenIDClient(
            api_key=settings.steam.api_key,
            realm=settings.auth.steam_realm,
            return_url=settings.auth.steam_return_url,
        )
