"""Steam OpenID 2.0 client implementation.

Steam only speaks OpenID 2.0, so a login is a redirect to Steam's
``checkid_setup`` endpoint followed by a ``check_authentication`` round trip
to confirm the signed assertion. The assertion carries nothing but the
SteamID64; the profile comes from the Steam Web API.
"""

import re
from collections.abc import Mapping
from urllib.parse import urlencode

import httpx
import logfire

from outpost.adapter.error import ProviderError
from outpost.adapter.state import PendingStates
from outpost.domain.service.auth_service import OAuthClient
from outpost.domain.value.types import SteamId, SteamProfile

STEAM_OPENID_ENDPOINT = "https://steamcommunity.com/openid/login"
STEAM_PLAYER_SUMMARIES_URL = (
    "https://api.steampowered.com/ISteamUser/GetPlayerSummaries/v0002/"
)
OPENID_NS = "http://specs.openid.net/auth/2.0"
OPENID_IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"

CLAIMED_ID_PATTERN = re.compile(
    r"^https?://steamcommunity\.com/openid/id/(\d{17})/?$"
)


class SteamOpenIDError(ProviderError):
    """Steam OpenID error."""

    pass


class SteamOpenIDClient(OAuthClient):
    """Base class for Steam login clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealSteamOpenIDClient(SteamOpenIDClient):
    """Steam OpenID 2.0 client backed by steamcommunity.com."""

    def __init__(self, api_key: str, realm: str, return_url: str) -> None:
        """Initialize Steam OpenID client.

        Args:
            api_key: Steam Web API key for player summaries
            realm: OpenID realm (the API base URL)
            return_url: Callback URL Steam redirects back to
        """
        self.api_key = api_key
        self.realm = realm
        self.return_url = return_url

        self._pending_states = PendingStates()

    async def initiate_authorization(self, state: str) -> str:
        """Build the Steam login URL.

        OpenID 2.0 has no state parameter, so the nonce rides along in
        ``return_to`` and comes back as a plain query parameter.
        """
        self._pending_states.add(state)

        params = {
            "openid.ns": OPENID_NS,
            "openid.mode": "checkid_setup",
            "openid.return_to": f"{self.return_url}?{urlencode({'state': state})}",
            "openid.realm": self.realm,
            "openid.identity": OPENID_IDENTIFIER_SELECT,
            "openid.claimed_id": OPENID_IDENTIFIER_SELECT,
        }

        logfire.info("Steam OpenID login initiated", return_url=self.return_url)

        return f"{STEAM_OPENID_ENDPOINT}?{urlencode(params)}"

    async def complete_authorization(self, params: Mapping[str, str]) -> SteamProfile:
        """Verify the Steam assertion and load the player's profile.

        Args:
            params: Callback query parameters (openid.* plus state)

        Returns:
            Steam profile of the signed-in player

        Raises:
            SteamOpenIDError: If the assertion is missing, forged or stale
        """
        mode = params.get("openid.mode")
        if mode != "id_res":
            raise SteamOpenIDError(f"Steam login not completed (mode={mode})")

        state = params.get("state")
        if not self._pending_states.consume(state):
            raise SteamOpenIDError("Invalid or expired login state")

        return_to = params.get("openid.return_to", "")
        if not return_to.startswith(self.return_url):
            raise SteamOpenIDError("Assertion was issued for another return URL")

        steam_id = self._extract_steam_id(params.get("openid.claimed_id", ""))
        await self._check_authentication(params)
        player = await self._get_player_summary(steam_id)

        logfire.info(
            "Steam OpenID login completed",
            steam_id=steam_id,
            persona=player.get("personaname"),
        )

        return SteamProfile(
            steam_id=SteamId(steam_id),
            display_name=player.get("personaname") or steam_id,
            avatar_url=player.get("avatar"),
            profile_url=player.get("profileurl"),
        )

    @staticmethod
    def _extract_steam_id(claimed_id: str) -> str:
        match = CLAIMED_ID_PATTERN.match(claimed_id)
        if not match:
            raise SteamOpenIDError(f"Unrecognised claimed_id: {claimed_id!r}")
        return match.group(1)

    async def _check_authentication(self, params: Mapping[str, str]) -> None:
        """Ask Steam to confirm the signature on the assertion.

        Raises:
            SteamOpenIDError: If Steam does not answer ``is_valid:true``
        """
        data = {k: v for k, v in params.items() if k.startswith("openid.")}
        data["openid.mode"] = "check_authentication"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    STEAM_OPENID_ENDPOINT, data=data, timeout=30.0
                )
        except httpx.HTTPError as e:
            logfire.error("Steam check_authentication HTTP error", error=str(e))
            raise SteamOpenIDError(f"HTTP error during verification: {e}")

        if response.status_code != 200:
            logfire.error(
                "Steam check_authentication failed",
                status_code=response.status_code,
            )
            raise SteamOpenIDError(f"Verification failed: {response.status_code}")

        # Key-value form body, one "key:value" per line
        fields = dict(
            line.split(":", 1) for line in response.text.splitlines() if ":" in line
        )
        if fields.get("is_valid", "").strip() != "true":
            logfire.warn("Steam rejected OpenID assertion")
            raise SteamOpenIDError("Steam rejected the login assertion")

    async def _get_player_summary(self, steam_id: str) -> dict:
        """Fetch the public profile for a SteamID64.

        Raises:
            SteamOpenIDError: If the key is missing or the lookup fails
        """
        if not self.api_key:
            raise SteamOpenIDError("Steam Web API key is not configured")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    STEAM_PLAYER_SUMMARIES_URL,
                    params={"key": self.api_key, "steamids": steam_id},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Steam player summary HTTP error", error=str(e))
            raise SteamOpenIDError(f"HTTP error fetching player summary: {e}")

        if response.status_code != 200:
            logfire.error(
                "Steam player summary request failed",
                status_code=response.status_code,
            )
            raise SteamOpenIDError(
                f"Player summary request failed: {response.status_code}"
            )

        players = response.json().get("response", {}).get("players", [])
        if not players:
            raise SteamOpenIDError(f"No player summary for {steam_id}")
        return players[0]


class MockSteamOpenIDClient(SteamOpenIDClient):
    """Mock Steam client for testing.

    Returns ``profile`` for every completed login without network calls.
    A callback with ``openid.mode=cancel`` fails like a cancelled login.
    """

    def __init__(self, profile: SteamProfile | None = None) -> None:
        self.profile = profile or SteamProfile(
            steam_id=SteamId("76561198000000001"),
            display_name="Mock Survivor",
            avatar_url="https://avatars.steamstatic.com/mock.jpg",
            profile_url="https://steamcommunity.com/id/mocksurvivor/",
        )

    async def initiate_authorization(self, state: str) -> str:
        return f"{STEAM_OPENID_ENDPOINT}?state={state}&mock=true"

    async def complete_authorization(self, params: Mapping[str, str]) -> SteamProfile:
        if params.get("openid.mode") == "cancel":
            raise SteamOpenIDError("Steam login not completed (mode=cancel)")
        return self.profile
