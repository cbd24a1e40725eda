"""Discord OAuth 2.0 client implementation."""

from collections.abc import Mapping
from urllib.parse import urlencode

import httpx
import logfire

from outpost.adapter.error import ProviderError
from outpost.adapter.state import PendingStates
from outpost.domain.service.auth_service import OAuthClient
from outpost.domain.value.types import DiscordId, DiscordProfile

DISCORD_AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
DISCORD_API_BASE = "https://discord.com/api/v10"


class DiscordOAuthError(ProviderError):
    """Discord OAuth error."""

    pass


class DiscordOAuthClient(OAuthClient):
    """Base class for Discord OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealDiscordOAuthClient(DiscordOAuthClient):
    """Discord OAuth 2.0 authorization code flow client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: list[str],
    ) -> None:
        """Initialize Discord OAuth client.

        Args:
            client_id: Discord application client ID
            client_secret: Discord application client secret
            redirect_uri: Callback URL registered with Discord
            scopes: OAuth scopes to request
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = scopes

        self.token_url = f"{DISCORD_API_BASE}/oauth2/token"
        self.user_info_url = f"{DISCORD_API_BASE}/users/@me"

        self._pending_states = PendingStates()

    async def initiate_authorization(self, state: str) -> str:
        """Build the Discord authorize URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._pending_states.add(state)

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(self.scopes),
            "state": state,
        }

        logfire.info(
            "Discord OAuth authorization initiated",
            redirect_uri=self.redirect_uri,
            scopes=self.scopes,
        )

        return f"{DISCORD_AUTHORIZE_URL}?{urlencode(params)}"

    async def complete_authorization(
        self, params: Mapping[str, str]
    ) -> DiscordProfile:
        """Exchange the callback code and read the Discord user.

        Args:
            params: Callback query parameters (code, state or error)

        Returns:
            Discord profile of the signed-in user

        Raises:
            DiscordOAuthError: If the user denied access or the exchange fails
        """
        if "error" in params:
            raise DiscordOAuthError(f"Discord authorization denied: {params['error']}")

        code = params.get("code")
        state = params.get("state")
        if not code:
            raise DiscordOAuthError("Missing authorization code")
        if not self._pending_states.consume(state):
            raise DiscordOAuthError("Invalid or expired login state")

        access_token = await self._exchange_code_for_token(code)
        user_info = await self._get_user_info(access_token)

        logfire.info(
            "Discord OAuth completed",
            discord_id=user_info["id"],
            username=user_info.get("username"),
        )

        return DiscordProfile(
            discord_id=DiscordId(str(user_info["id"])),
            username=user_info["username"],
            discriminator=user_info.get("discriminator") or "0",
            avatar=user_info.get("avatar"),
            email=user_info.get("email"),
        )

    async def _exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            DiscordOAuthError: If token exchange fails
        """
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    auth=(self.client_id, self.client_secret),
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Discord token exchange HTTP error", error=str(e))
            raise DiscordOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Discord token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise DiscordOAuthError(f"Token exchange failed: {response.status_code}")

        return response.json()["access_token"]

    async def _get_user_info(self, access_token: str) -> dict:
        """Get the current user from the Discord API.

        Raises:
            DiscordOAuthError: If the request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Discord user info HTTP error", error=str(e))
            raise DiscordOAuthError(f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "Discord user info request failed",
                status_code=response.status_code,
            )
            raise DiscordOAuthError(
                f"User info request failed: {response.status_code}"
            )

        return response.json()


class MockDiscordOAuthClient(DiscordOAuthClient):
    """Mock Discord OAuth client for testing.

    Returns ``profile`` for every completed login without network calls.
    A callback carrying ``error`` fails like a denied authorization.
    """

    def __init__(self, profile: DiscordProfile | None = None) -> None:
        self.profile = profile or DiscordProfile(
            discord_id=DiscordId("200000000000000001"),
            username="mocksurvivor",
            discriminator="0001",
            avatar="a1b2c3",
            email="mock@discord.test",
        )

    async def initiate_authorization(self, state: str) -> str:
        return f"{DISCORD_AUTHORIZE_URL}?state={state}&mock=true"

    async def complete_authorization(
        self, params: Mapping[str, str]
    ) -> DiscordProfile:
        if "error" in params:
            raise DiscordOAuthError(f"Discord authorization denied: {params['error']}")
        return self.profile
