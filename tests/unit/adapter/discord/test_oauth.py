"""Unit tests for the Discord OAuth client."""

from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest

from outpost.adapter.discord import DiscordOAuthError, RealDiscordOAuthClient

CALLBACK_URL = "http://localhost:3000/auth/discord/callback"


def make_client() -> RealDiscordOAuthClient:
    return RealDiscordOAuthClient(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri=CALLBACK_URL,
        scopes=["identify", "email", "guilds.join"],
    )


def make_response(status_code: int = 200, json_data=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = str(json_data)
    response.json.return_value = json_data
    return response


DISCORD_USER = {
    "id": "80351110224678912",
    "username": "nelly",
    "discriminator": "1337",
    "avatar": "8342729096ea3675442027381ff50dfe",
    "email": "nelly@discord.com",
}


class TestInitiateAuthorization:
    """Tests for the Discord authorize URL."""

    @pytest.mark.asyncio
    async def test_builds_authorize_url_with_scopes_and_state(self):
        # Arrange
        client = make_client()

        # Act
        url = await client.initiate_authorization("state123")

        # Assert
        query = parse_qs(urlparse(url).query)
        assert url.startswith("https://discord.com/oauth2/authorize?")
        assert query["response_type"] == ["code"]
        assert query["client_id"] == ["client-id"]
        assert query["redirect_uri"] == [CALLBACK_URL]
        assert query["scope"] == ["identify email guilds.join"]
        assert query["state"] == ["state123"]


class TestCompleteAuthorization:
    """Tests for the Discord callback exchange."""

    @pytest.mark.asyncio
    async def test_exchanges_code_and_reads_user(self):
        """A valid callback should yield the Discord profile."""
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(
                return_value=make_response(json_data={"access_token": "token-abc"})
            )
            http.get = AsyncMock(return_value=make_response(json_data=DISCORD_USER))

            # Act
            profile = await client.complete_authorization(
                {"code": "auth-code", "state": "state123"}
            )

        # Assert
        assert str(profile.discord_id) == "80351110224678912"
        assert profile.display_name == "nelly#1337"
        assert profile.avatar == "8342729096ea3675442027381ff50dfe"
        assert profile.email == "nelly@discord.com"

        assert http.post.call_args.args[0] == "https://discord.com/api/v10/oauth2/token"
        assert http.post.call_args.kwargs["data"]["code"] == "auth-code"
        assert http.post.call_args.kwargs["auth"] == ("client-id", "client-secret")
        assert http.get.call_args.kwargs["headers"] == {
            "Authorization": "Bearer token-abc"
        }

    @pytest.mark.asyncio
    async def test_missing_discriminator_defaults_to_zero(self):
        """Accounts on the new username system report no discriminator."""
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")
        user = {**DISCORD_USER, "discriminator": None, "email": None}

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(
                return_value=make_response(json_data={"access_token": "token-abc"})
            )
            http.get = AsyncMock(return_value=make_response(json_data=user))

            # Act
            profile = await client.complete_authorization(
                {"code": "auth-code", "state": "state123"}
            )

        # Assert
        assert profile.display_name == "nelly#0"
        assert profile.email is None

    @pytest.mark.asyncio
    async def test_denied_authorization_raises(self):
        # Arrange
        client = make_client()

        # Act & Assert
        with pytest.raises(DiscordOAuthError, match="access_denied"):
            await client.complete_authorization(
                {"error": "access_denied", "state": "state123"}
            )

    @pytest.mark.asyncio
    async def test_unknown_state_raises(self):
        # Arrange
        client = make_client()

        # Act & Assert
        with pytest.raises(DiscordOAuthError, match="state"):
            await client.complete_authorization({"code": "auth-code", "state": "forged"})

    @pytest.mark.asyncio
    async def test_expired_state_raises(self):
        # Arrange
        client = make_client()
        client._pending_states.clock = lambda: 0.0
        await client.initiate_authorization("state123")
        client._pending_states.clock = lambda: 3600.0

        # Act & Assert
        with pytest.raises(DiscordOAuthError, match="state"):
            await client.complete_authorization(
                {"code": "auth-code", "state": "state123"}
            )

    @pytest.mark.asyncio
    async def test_missing_code_raises(self):
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")

        # Act & Assert
        with pytest.raises(DiscordOAuthError, match="code"):
            await client.complete_authorization({"state": "state123"})

    @pytest.mark.asyncio
    async def test_failed_token_exchange_raises(self):
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(
                return_value=make_response(400, {"error": "invalid_grant"})
            )

            # Act & Assert
            with pytest.raises(DiscordOAuthError, match="Token exchange failed"):
                await client.complete_authorization(
                    {"code": "stale-code", "state": "state123"}
                )
