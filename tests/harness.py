"""Test harness for unit and integration tests.

Integration tests assume PostgreSQL is reachable at DATABASE__URL with
migrations applied.
"""

import pytest_asyncio

from outpost.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    The fixture builds a fresh test container and yields a request-scoped
    child container for resolving services.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_login(unit_env):
            use_case = await unit_env.get(LoginUseCase)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def resolve(client, dependency):
    """Resolve an APP-scoped dependency from an app running under TestClient.

    E2E tests use this to reach the in-memory repositories behind the API.
    """
    container = client.app.state.dishka_container
    return client.portal.call(container.get, dependency)
