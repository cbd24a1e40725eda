"""Server status domain service."""

import logfire

from outpost.domain.model import ServerStatus
from outpost.domain.repository import ServerStatusRepository

from .base import Service


class ServerStatusService(Service):
    """Domain service for game server status reads."""

    def __init__(self, server_status_repository: ServerStatusRepository) -> None:
        self.server_status_repository = server_status_repository

    async def list_active(self) -> list[ServerStatus]:
        """List active servers.

        Raises:
            PersistenceError: If storage fails
        """
        with logfire.span("server_status_service.list_active"):
            servers = await self.server_status_repository.find_active()
            logfire.info(
                "Active servers listed",
                count=len(servers),
                online=sum(1 for s in servers if s.is_online),
            )
            return servers
