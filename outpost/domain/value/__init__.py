"""Domain value objects for Outpost."""

from outpost.domain.value.identifiers import IdentityId, ServerStatusId
from outpost.domain.value.types import (
    AuthProvider,
    DiscordId,
    DiscordProfile,
    LinkAction,
    ProviderProfile,
    SteamId,
    SteamProfile,
)

__all__ = [
    # Identifiers
    "IdentityId",
    "ServerStatusId",
    # Types
    "AuthProvider",
    "LinkAction",
    "SteamId",
    "DiscordId",
    "SteamProfile",
    "DiscordProfile",
    "ProviderProfile",
]
