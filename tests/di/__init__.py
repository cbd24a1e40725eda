"""Mock providers for testing."""

from .container import build_test_container
from .discord import MockDiscordProvider
from .persistence import MockPersistenceProvider
from .steam import MockSteamProvider

__all__ = [
    "MockDiscordProvider",
    "MockPersistenceProvider",
    "MockSteamProvider",
    "build_test_container",
]
