"""Infrastructure providers."""

# Import bases
from .discord import DiscordProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider
from .steam import SteamProvider

# Import implementations (needed for __subclasses__())
from .discord import ProdDiscordProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .steam import ProdSteamProvider  # noqa: F401

__all__ = [
    "DiscordProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdDiscordProvider",
    "ProdPersistenceProvider",
    "ProdSteamProvider",
    "SteamProvider",
]
