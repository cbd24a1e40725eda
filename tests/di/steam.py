"""Mock Steam providers for testing."""

from dishka import Scope, provide

from outpost.adapter.steam import MockSteamOpenIDClient, SteamOpenIDClient
from outpost.util.di.infrastructure.steam import SteamProvider


class MockSteamProvider(SteamProvider):
    """Mock Steam provider using the mock OpenID client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_steam_openid_client(self) -> SteamOpenIDClient:
        """Provide mock Steam OpenID client."""
        return MockSteamOpenIDClient()
