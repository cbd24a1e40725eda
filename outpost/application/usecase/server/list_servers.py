"""List servers use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from outpost.application.usecase.base import BaseUseCase
from outpost.domain.service import ServerStatusService


class ServerItem(BaseModel):
    """Server entry in response (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    address: str
    port: int
    map_name: str | None
    player_count: int
    max_players: int
    is_online: bool
    last_checked: datetime | None


class ListServersUseCase(BaseUseCase):
    """Use case for listing active game servers.

    The listing is best-effort: any failure to read status rows yields an
    empty list rather than an error.
    """

    def __init__(self, server_status_service: ServerStatusService) -> None:
        """Initialize list servers use case.

        Args:
            server_status_service: Server status domain service
        """
        self.server_status_service = server_status_service

    async def execute(self, request: None = None) -> list[ServerItem]:
        """Execute list servers flow.

        Returns:
            Active servers, or an empty list if they could not be read
        """
        try:
            servers = await self.server_status_service.list_active()
        except Exception as e:
            logfire.error(
                "Error fetching servers, returning empty list",
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        return [
            ServerItem(
                id=str(server.id),
                name=server.name,
                address=server.address,
                port=server.port,
                map_name=server.map_name,
                player_count=server.player_count,
                max_players=server.max_players,
                is_online=server.is_online,
                last_checked=server.last_checked,
            )
            for server in servers
        ]
