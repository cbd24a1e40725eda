"""Unit tests for ListServersUseCase."""

from datetime import datetime, timezone
from uuid import uuid4

from dishka import AsyncContainer
import pytest

from outpost.application.usecase.server import ListServersUseCase
from outpost.domain.error import PersistenceError
from outpost.domain.model import ServerStatus
from outpost.domain.repository import ServerStatusRepository
from outpost.domain.service import ServerStatusService
from outpost.domain.value import ServerStatusId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def make_server(name: str, **overrides) -> ServerStatus:
    fields = {
        "id": ServerStatusId(uuid4()),
        "name": name,
        "address": "203.0.113.10",
        "port": 2302,
        "map_name": "chernarusplus",
        "player_count": 12,
        "max_players": 60,
        "is_online": True,
        "last_checked": datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return ServerStatus(**fields)


class FailingServerStatusRepository(ServerStatusRepository):
    async def find_active(self) -> list[ServerStatus]:
        raise PersistenceError("server status listing failed: timeout")


class TestListServersUseCase:
    """Tests for ListServersUseCase."""

    @pytest.mark.asyncio
    async def test_lists_active_servers_by_name(self, unit_env: AsyncContainer):
        """Inactive servers are hidden and the rest are sorted by name."""
        # Arrange
        repo = await unit_env.get(ServerStatusRepository)
        repo.add(make_server("Namalsk PvE"))
        repo.add(make_server("Chernarus Hardcore"))
        repo.add(make_server("Retired", is_active=False))
        use_case = await unit_env.get(ListServersUseCase)

        # Act
        servers = await use_case.execute()

        # Assert
        assert [s.name for s in servers] == ["Chernarus Hardcore", "Namalsk PvE"]
        dumped = servers[0].model_dump(by_alias=True)
        assert dumped["mapName"] == "chernarusplus"
        assert dumped["playerCount"] == 12
        assert dumped["maxPlayers"] == 60
        assert dumped["isOnline"] is True

    @pytest.mark.asyncio
    async def test_no_servers_returns_empty_list(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ListServersUseCase)

        # Act & Assert
        assert await use_case.execute() == []

    @pytest.mark.asyncio
    async def test_storage_failure_degrades_to_empty_list(self):
        """A repository failure should not surface as an error."""
        # Arrange
        use_case = ListServersUseCase(
            ServerStatusService(FailingServerStatusRepository())
        )

        # Act
        servers = await use_case.execute()

        # Assert
        assert servers == []
