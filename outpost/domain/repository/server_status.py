"""Server status repository interface."""

from abc import ABC, abstractmethod

from outpost.domain.model.server_status import ServerStatus


class ServerStatusRepository(ABC):
    """Read access to stored game server status."""

    @abstractmethod
    async def find_active(self) -> list[ServerStatus]:
        """List servers flagged active, ordered by name.

        Returns:
            Active servers (may be empty)
        """
        pass
