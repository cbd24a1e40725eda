"""Steam OpenID adapter."""

from .openid import (
    MockSteamOpenIDClient,
    RealSteamOpenIDClient,
    SteamOpenIDClient,
    SteamOpenIDError,
)

__all__ = [
    "SteamOpenIDClient",
    "RealSteamOpenIDClient",
    "MockSteamOpenIDClient",
    "SteamOpenIDError",
]
