"""ServerStatus repository implementation using PostgreSQL."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from outpost.domain.model import ServerStatus
from outpost.domain.repository import ServerStatusRepository
from outpost.persistence.database import translate_errors
from outpost.persistence.mappers import row_to_server_status
from outpost.persistence.tables import server_statuses_table


class PostgresServerStatusRepository(ServerStatusRepository):
    """PostgreSQL implementation of ServerStatusRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_active(self) -> list[ServerStatus]:
        """List active servers ordered by name."""
        stmt = (
            select(server_statuses_table)
            .where(server_statuses_table.c.is_active == True)  # noqa: E712
            .order_by(server_statuses_table.c.name)
        )
        async with translate_errors("server status listing"):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_server_status(dict(row)) for row in rows]
