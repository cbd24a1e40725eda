"""Dependency injection module."""

from typing import Type

from outpost.util.di.application import ProdApplicationProvider
from outpost.util.di.base import Component, ProviderBase
from outpost.util.di.core import ProdConfigProvider
from outpost.util.di.domain import ProdDomainProvider
from outpost.util.di.infrastructure import (
    DiscordProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdDiscordProvider,
    ProdPersistenceProvider,
    ProdSteamProvider,
    SteamProvider,
)

# Concrete providers first, then mockable components
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    SteamProvider,
    DiscordProvider,
    PersistenceProvider,
    OAuthAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get the provider class to instantiate for a base.

    A base without subclasses is concrete and used directly. A base with
    subclasses is a mockable component; the subclass whose ``__is_mock__``
    matches ``use_mock`` is chosen.

    Raises:
        ValueError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "DiscordProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "SteamProvider",
    "ProdDiscordProvider",
    "ProdPersistenceProvider",
    "ProdSteamProvider",
]
