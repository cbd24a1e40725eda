"""Test container builder with selective unmocking."""

from typing import get_args

from dishka import AsyncContainer, Provider, make_async_container

from outpost.util.di import PROVIDERS, Component, get_provider

KNOWN_COMPONENTS: frozenset[str] = frozenset(get_args(Component))


def build_test_container(
    unmock: set[Component] | None = None, *extra: Provider
) -> AsyncContainer:
    """Build a container where mockable components default to their mocks.

    Args:
        unmock: Components that should use their production provider
            (e.g. ``{"persistence"}`` for PostgreSQL-backed tests)
        extra: Additional providers, e.g. FastapiProvider for app tests

    Raises:
        ValueError: If ``unmock`` names a component that does not exist
    """
    unmock = set(unmock or ())
    unknown = unmock - KNOWN_COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers, *extra)
