"""Identity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from outpost.domain.model import Identity
from outpost.domain.repository import IdentityRepository
from outpost.domain.value import DiscordId, IdentityId, SteamId
from outpost.persistence.database import translate_errors
from outpost.persistence.mappers import (
    discord_link_values,
    discord_refresh_values,
    identity_to_dict,
    row_to_identity,
    steam_refresh_values,
)
from outpost.persistence.tables import identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository.

    Uniqueness of steam_id and discord_id is enforced by the table's
    unique constraints. Writes run in a SAVEPOINT so that a unique
    violation leaves the request transaction usable for a retry.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, *criteria) -> Optional[Identity]:
        stmt = select(identities_table).where(*criteria)
        async with translate_errors("identity lookup"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID."""
        return await self._find_one(identities_table.c.id == identity_id)

    async def find_by_steam_id(self, steam_id: SteamId) -> Optional[Identity]:
        """Find the identity linked to a Steam account."""
        return await self._find_one(identities_table.c.steam_id == steam_id.root)

    async def find_by_discord_id(self, discord_id: DiscordId) -> Optional[Identity]:
        """Find the identity linked to a Discord account."""
        return await self._find_one(identities_table.c.discord_id == discord_id.root)

    async def find_merge_candidate(self) -> Optional[Identity]:
        """Find the newest identity with a Steam ID and no Discord ID."""
        stmt = (
            select(identities_table)
            .where(
                identities_table.c.steam_id.isnot(None),
                identities_table.c.discord_id.is_(None),
            )
            .order_by(identities_table.c.created_at.desc())
            .limit(1)
        )
        async with translate_errors("merge candidate lookup"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def find_all(self) -> list[Identity]:
        """List every identity, oldest first."""
        stmt = select(identities_table).order_by(identities_table.c.created_at)
        async with translate_errors("identity listing"):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_identity(dict(row)) for row in rows]

    async def save(self, identity: Identity) -> Identity:
        """Insert or update an identity.

        Raises:
            DuplicateKeyError: If steam_id or discord_id is already taken
            PersistenceError: On any other database failure
        """
        values = identity_to_dict(identity)

        async with translate_errors("identity save"):
            async with self.session.begin_nested():
                existing = await self.session.execute(
                    select(identities_table.c.id).where(
                        identities_table.c.id == identity.id
                    )
                )
                if existing.first():
                    stmt = (
                        identities_table.update()
                        .where(identities_table.c.id == identity.id)
                        .values(**values)
                    )
                else:
                    stmt = identities_table.insert().values(**values)
                await self.session.execute(stmt)

        return identity

    async def _update_returning(
        self, identity: Identity, values: dict, operation: str
    ) -> Optional[Identity]:
        stmt = (
            identities_table.update()
            .where(identities_table.c.id == identity.id)
            .values(**values)
            .returning(*identities_table.c)
        )
        async with translate_errors(operation):
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def refresh_steam_profile(self, identity: Identity) -> Optional[Identity]:
        """Update Steam profile columns; the returned row has current keys."""
        return await self._update_returning(
            identity, steam_refresh_values(identity), "steam profile refresh"
        )

    async def refresh_discord_profile(
        self, identity: Identity
    ) -> Optional[Identity]:
        """Update Discord profile columns; the returned row has current keys."""
        return await self._update_returning(
            identity, discord_refresh_values(identity), "discord profile refresh"
        )

    async def link_discord(self, identity: Identity) -> bool:
        """Attach Discord columns whatever the stored row holds."""
        stmt = (
            identities_table.update()
            .where(identities_table.c.id == identity.id)
            .values(**discord_link_values(identity))
        )

        async with translate_errors("discord link"):
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)

        return result.rowcount == 1

    async def link_discord_if_unlinked(self, identity: Identity) -> bool:
        """Attach Discord columns only while the row is still Steam-only.

        Under READ COMMITTED a concurrent committed link makes the WHERE
        clause fail on re-check, so the update touches no row.
        """
        stmt = (
            identities_table.update()
            .where(
                identities_table.c.id == identity.id,
                identities_table.c.steam_id.isnot(None),
                identities_table.c.discord_id.is_(None),
            )
            .values(**discord_link_values(identity))
        )

        async with translate_errors("discord link"):
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)

        return result.rowcount == 1
