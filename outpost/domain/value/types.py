"""Domain value objects for Outpost.

Value objects are immutable and defined by their values, not identity.
They carry the profile payloads returned by the authentication providers.
"""

import re
from enum import Enum

from pydantic import field_validator

from outpost.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    STEAM = "steam"
    DISCORD = "discord"


class LinkAction(str, Enum):
    """What the identity linker did with an authentication."""

    CREATED = "created"
    UPDATED = "updated"
    MERGED = "merged"


class SteamId(RootValueObject[str]):
    """64-bit Steam account identifier (SteamID64), kept as a string.

    Example: '76561197960287930'
    """

    @field_validator("root")
    @classmethod
    def validate_steam_id(cls, v: str) -> str:
        """Validate SteamID64 is a 17-digit number."""
        if not re.fullmatch(r"\d{17}", v):
            raise ValueError("Steam ID must be a 17-digit SteamID64")
        return v


class DiscordId(RootValueObject[str]):
    """Discord user snowflake, kept as a string."""

    @field_validator("root")
    @classmethod
    def validate_snowflake(cls, v: str) -> str:
        """Validate snowflake is numeric."""
        if not re.fullmatch(r"\d{1,20}", v):
            raise ValueError("Discord ID must be a numeric snowflake")
        return v


class SteamProfile(ValueObject):
    """Player information from a completed Steam OpenID login."""

    steam_id: SteamId
    display_name: str
    avatar_url: str | None = None
    profile_url: str | None = None

    @property
    def provider(self) -> AuthProvider:
        return AuthProvider.STEAM


class DiscordProfile(ValueObject):
    """User information from a completed Discord OAuth login."""

    discord_id: DiscordId
    username: str
    discriminator: str = "0"
    avatar: str | None = None  # Avatar hash, not a URL
    email: str | None = None

    @property
    def provider(self) -> AuthProvider:
        return AuthProvider.DISCORD

    @property
    def display_name(self) -> str:
        """Discriminator-qualified name, e.g. 'survivor#1234'."""
        return f"{self.username}#{self.discriminator}"


ProviderProfile = SteamProfile | DiscordProfile
