"""Unit tests for the Steam OpenID client."""

from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest

from outpost.adapter.steam import RealSteamOpenIDClient, SteamOpenIDError

RETURN_URL = "http://localhost:3000/auth/steam/return"
STEAM_ID = "76561197960287930"


def make_client(api_key: str = "STEAMKEY") -> RealSteamOpenIDClient:
    return RealSteamOpenIDClient(
        api_key=api_key, realm="http://localhost:3000", return_url=RETURN_URL
    )


def callback_params(state: str, claimed_id: str | None = None) -> dict[str, str]:
    claimed = claimed_id or f"https://steamcommunity.com/openid/id/{STEAM_ID}"
    return {
        "openid.ns": "http://specs.openid.net/auth/2.0",
        "openid.mode": "id_res",
        "openid.op_endpoint": "https://steamcommunity.com/openid/login",
        "openid.claimed_id": claimed,
        "openid.identity": claimed,
        "openid.return_to": f"{RETURN_URL}?state={state}",
        "openid.response_nonce": "2024-06-01T12:00:00Zabc",
        "openid.assoc_handle": "1234567890",
        "openid.signed": "signed,op_endpoint,claimed_id,identity,return_to",
        "openid.sig": "c2lnbmF0dXJl",
        "state": state,
    }


def make_response(status_code: int = 200, text: str = "", json_data=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    return response


VALID_ASSERTION = make_response(
    text="ns:http://specs.openid.net/auth/2.0\nis_valid:true\n"
)
PLAYER_SUMMARY = make_response(
    json_data={
        "response": {
            "players": [
                {
                    "steamid": STEAM_ID,
                    "personaname": "Survivor",
                    "avatar": "https://avatars.steamstatic.com/abc.jpg",
                    "profileurl": "https://steamcommunity.com/id/survivor/",
                }
            ]
        }
    }
)


class TestInitiateAuthorization:
    """Tests for the Steam login URL."""

    @pytest.mark.asyncio
    async def test_builds_checkid_setup_url(self):
        # Arrange
        client = make_client()

        # Act
        url = await client.initiate_authorization("state123")

        # Assert
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://steamcommunity.com/openid/login"
        )
        assert query["openid.mode"] == ["checkid_setup"]
        assert query["openid.realm"] == ["http://localhost:3000"]
        assert query["openid.return_to"] == [f"{RETURN_URL}?state=state123"]
        assert query["openid.claimed_id"] == [
            "http://specs.openid.net/auth/2.0/identifier_select"
        ]


class TestCompleteAuthorization:
    """Tests for verifying the Steam callback."""

    @pytest.mark.asyncio
    async def test_verifies_assertion_and_fetches_profile(self):
        """A valid assertion should yield the player's Steam profile."""
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(return_value=VALID_ASSERTION)
            http.get = AsyncMock(return_value=PLAYER_SUMMARY)

            # Act
            profile = await client.complete_authorization(callback_params("state123"))

        # Assert
        assert str(profile.steam_id) == STEAM_ID
        assert profile.display_name == "Survivor"
        assert profile.avatar_url == "https://avatars.steamstatic.com/abc.jpg"
        assert profile.profile_url == "https://steamcommunity.com/id/survivor/"

        sent = http.post.call_args.kwargs["data"]
        assert sent["openid.mode"] == "check_authentication"
        assert sent["openid.sig"] == "c2lnbmF0dXJl"
        assert "state" not in sent

        assert http.get.call_args.kwargs["params"] == {
            "key": "STEAMKEY",
            "steamids": STEAM_ID,
        }

    @pytest.mark.asyncio
    async def test_state_is_single_use(self):
        """Replaying a callback should fail once its state is consumed."""
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(return_value=VALID_ASSERTION)
            http.get = AsyncMock(return_value=PLAYER_SUMMARY)
            await client.complete_authorization(callback_params("state123"))

            # Act & Assert
            with pytest.raises(SteamOpenIDError, match="state"):
                await client.complete_authorization(callback_params("state123"))

    @pytest.mark.asyncio
    async def test_rejected_assertion_raises(self):
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(
                return_value=make_response(
                    text="ns:http://specs.openid.net/auth/2.0\nis_valid:false\n"
                )
            )
            http.get = AsyncMock()

            # Act & Assert
            with pytest.raises(SteamOpenIDError, match="rejected"):
                await client.complete_authorization(callback_params("state123"))
            http.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancelled_login_raises(self):
        # Arrange
        client = make_client()

        # Act & Assert
        with pytest.raises(SteamOpenIDError, match="cancel"):
            await client.complete_authorization({"openid.mode": "cancel"})

    @pytest.mark.asyncio
    async def test_unknown_state_raises_without_network(self):
        # Arrange
        client = make_client()

        with patch("httpx.AsyncClient") as mock_client:
            # Act & Assert
            with pytest.raises(SteamOpenIDError, match="state"):
                await client.complete_authorization(callback_params("never-issued"))
            mock_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_foreign_claimed_id_raises(self):
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")
        params = callback_params(
            "state123", claimed_id="https://evil.example.com/openid/id/76561197960287930"
        )

        # Act & Assert
        with pytest.raises(SteamOpenIDError, match="claimed_id"):
            await client.complete_authorization(params)

    @pytest.mark.asyncio
    async def test_return_to_for_other_site_raises(self):
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")
        params = callback_params("state123")
        params["openid.return_to"] = "https://elsewhere.example.com/steam?state=state123"

        # Act & Assert
        with pytest.raises(SteamOpenIDError, match="return URL"):
            await client.complete_authorization(params)

    @pytest.mark.asyncio
    async def test_missing_player_summary_raises(self):
        # Arrange
        client = make_client()
        await client.initiate_authorization("state123")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(return_value=VALID_ASSERTION)
            http.get = AsyncMock(
                return_value=make_response(json_data={"response": {"players": []}})
            )

            # Act & Assert
            with pytest.raises(SteamOpenIDError, match="No player summary"):
                await client.complete_authorization(callback_params("state123"))

    @pytest.mark.asyncio
    async def test_missing_api_key_raises(self):
        # Arrange
        client = make_client(api_key="")
        await client.initiate_authorization("state123")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(return_value=VALID_ASSERTION)

            # Act & Assert
            with pytest.raises(SteamOpenIDError, match="API key"):
                await client.complete_authorization(callback_params("state123"))
