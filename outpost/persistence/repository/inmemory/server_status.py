"""In-memory server status repository for testing."""

from outpost.domain.model import ServerStatus
from outpost.domain.repository import ServerStatusRepository
from outpost.domain.value import ServerStatusId


class InMemoryServerStatusRepository(ServerStatusRepository):
    """In-memory implementation of ServerStatusRepository for testing.

    ``add`` stands in for the external poller that writes status rows.
    """

    def __init__(self) -> None:
        self._servers: dict[ServerStatusId, ServerStatus] = {}

    def add(self, server: ServerStatus) -> ServerStatus:
        self._servers[server.id] = server
        return server

    async def find_active(self) -> list[ServerStatus]:
        """List active servers ordered by name."""
        return sorted(
            (s for s in self._servers.values() if s.is_active),
            key=lambda s: s.name,
        )
