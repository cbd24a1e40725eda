"""Authentication domain service."""

from collections.abc import Mapping

from outpost.domain.value.types import AuthProvider, ProviderProfile

from .base import Service


class OAuthClient:
    """Provider login client interface (Steam OpenID, Discord OAuth2)."""

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider login URL.

        Args:
            state: Nonce echoed back on the callback for CSRF protection

        Returns:
            Authorization URL to redirect the browser to
        """
        raise NotImplementedError

    async def complete_authorization(
        self, params: Mapping[str, str]
    ) -> ProviderProfile:
        """Verify a provider callback and fetch the player's profile.

        Args:
            params: Query parameters the provider sent to the callback URL

        Returns:
            Provider profile of the authenticated account
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service dispatching logins to the provider clients."""

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to login client implementation
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise ValueError(f"Unsupported provider: {provider}")
        return client

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Start a login with the given provider.

        Raises:
            ValueError: If provider not supported
        """
        return await self._client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, params: Mapping[str, str]
    ) -> ProviderProfile:
        """Finish a login from the provider's callback parameters.

        Raises:
            ValueError: If provider not supported
        """
        return await self._client(provider).complete_authorization(params)
