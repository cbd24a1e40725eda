"""Unit tests for the Identity model."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from outpost.domain.error import BusinessRuleViolationError
from outpost.domain.model import Identity
from outpost.domain.value import DiscordId, IdentityId, SteamId
from tests.conftest import BASE_TIME, make_discord_profile, make_steam_profile


class TestFullyAuthenticatedFlag:
    """The flag is derived from the two provider keys."""

    def test_steam_only_is_not_fully_authenticated(self):
        identity = Identity.from_steam(make_steam_profile(1), BASE_TIME)
        assert identity.is_fully_authenticated is False
        assert identity.is_merge_candidate is True

    def test_discord_only_is_not_fully_authenticated(self):
        identity = Identity.from_discord(make_discord_profile(1), BASE_TIME)
        assert identity.is_fully_authenticated is False
        assert identity.is_merge_candidate is False

    def test_both_keys_make_fully_authenticated(self):
        identity = Identity(
            id=IdentityId(uuid4()),
            steam_id=SteamId("76561197960287930"),
            discord_id=DiscordId("80351110224678912"),
        )
        assert identity.is_fully_authenticated is True
        assert identity.is_merge_candidate is False

    def test_flag_is_serialized_with_the_model(self):
        """model_dump carries the derived flag for the denormalised column."""
        identity = Identity.from_steam(make_steam_profile(1), BASE_TIME)
        linked = identity.link_discord(make_discord_profile(1), BASE_TIME)

        assert identity.model_dump()["is_fully_authenticated"] is False
        assert linked.model_dump()["is_fully_authenticated"] is True


class TestIdentityTransitions:
    """Tests for login and link transitions."""

    def test_link_discord_copies_profile_and_keeps_steam(self):
        # Arrange
        steam_profile = make_steam_profile(1)
        discord_profile = make_discord_profile(1, username="medic", discriminator="0042")
        identity = Identity.from_steam(steam_profile, BASE_TIME)

        # Act
        linked = identity.link_discord(discord_profile, BASE_TIME)

        # Assert
        assert linked.id == identity.id
        assert linked.steam_id == steam_profile.steam_id
        assert linked.discord_id == discord_profile.discord_id
        assert linked.discord_name == "medic#0042"
        assert linked.created_at == identity.created_at
        assert identity.discord_id is None  # Original is unchanged

    def test_link_discord_rejects_already_linked_identity(self):
        identity = Identity.from_steam(make_steam_profile(1), BASE_TIME).link_discord(
            make_discord_profile(1), BASE_TIME
        )

        with pytest.raises(BusinessRuleViolationError):
            identity.link_discord(make_discord_profile(2), BASE_TIME)

    def test_steam_login_for_other_account_is_rejected(self):
        identity = Identity.from_steam(make_steam_profile(1), BASE_TIME)

        with pytest.raises(BusinessRuleViolationError):
            identity.apply_steam_login(make_steam_profile(2), BASE_TIME)

    def test_discord_login_for_other_account_is_rejected(self):
        identity = Identity.from_discord(make_discord_profile(1), BASE_TIME)

        with pytest.raises(BusinessRuleViolationError):
            identity.apply_discord_login(make_discord_profile(2), BASE_TIME)

    def test_identity_is_immutable(self):
        identity = Identity.from_steam(make_steam_profile(1), BASE_TIME)

        with pytest.raises(ValidationError):
            identity.steam_name = "changed"


class TestProviderIds:
    """Validation of provider account identifiers."""

    @pytest.mark.parametrize("value", ["123", "7656119796028793x", "765611979602879300"])
    def test_invalid_steam_id(self, value):
        with pytest.raises(ValidationError):
            SteamId(value)

    def test_valid_steam_id(self):
        assert str(SteamId("76561197960287930")) == "76561197960287930"

    def test_invalid_discord_id(self):
        with pytest.raises(ValidationError):
            DiscordId("not-a-snowflake")
