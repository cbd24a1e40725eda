"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from outpost.domain.model.identity import Identity
from outpost.domain.value import DiscordId, IdentityId, SteamId


class IdentityRepository(ABC):
    """Repository for the Identity aggregate.

    Implementations must enforce nullable-unique semantics on ``steam_id``
    and ``discord_id`` (any number of NULLs, non-null values unique) and
    raise ``DuplicateKeyError`` on a violation. Other storage failures
    surface as ``PersistenceError``.
    """

    @abstractmethod
    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_steam_id(self, steam_id: SteamId) -> Optional[Identity]:
        """Find the identity linked to a Steam account.

        Args:
            steam_id: SteamID64 of the account

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_discord_id(self, discord_id: DiscordId) -> Optional[Identity]:
        """Find the identity linked to a Discord account.

        Args:
            discord_id: Discord user snowflake

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_merge_candidate(self) -> Optional[Identity]:
        """Find the most recently created Steam-only identity.

        Returns:
            Newest identity with steam_id set and discord_id unset, or None
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Identity]:
        """List every identity, oldest first."""
        pass

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """Save an identity (create or update), writing every column.

        Login flows only insert through this; updates of an existing row go
        through the targeted writes below.

        Args:
            identity: The identity to save

        Returns:
            The saved identity

        Raises:
            DuplicateKeyError: If a provider key is already taken
        """
        pass

    @abstractmethod
    async def refresh_steam_profile(self, identity: Identity) -> Optional[Identity]:
        """Write only the Steam profile fields plus last_login and updated_at.

        Provider keys and Discord fields in storage are left as they are, so
        a link committed since ``identity`` was read is kept.

        Args:
            identity: Identity carrying the refreshed Steam profile

        Returns:
            The stored identity after the write, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def refresh_discord_profile(
        self, identity: Identity
    ) -> Optional[Identity]:
        """Write only the Discord profile fields plus last_login and updated_at.

        Args:
            identity: Identity carrying the refreshed Discord profile

        Returns:
            The stored identity after the write, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def link_discord(self, identity: Identity) -> bool:
        """Write the Discord link columns without checking the stored row.

        Used by the unguarded strategy. A concurrent link to the same row is
        overwritten.

        Returns:
            True if the row was updated, False if it no longer exists

        Raises:
            DuplicateKeyError: If the Discord ID is already linked elsewhere
        """
        pass

    @abstractmethod
    async def link_discord_if_unlinked(self, identity: Identity) -> bool:
        """Write a Discord link only if the stored row is still Steam-only.

        The write succeeds only while the stored row has ``steam_id`` set and
        ``discord_id`` unset. This is the optimistic check that keeps two
        Discord logins from claiming the same Steam identity.

        Args:
            identity: Identity carrying the new Discord fields

        Returns:
            True if the row was updated, False if it no longer qualified

        Raises:
            DuplicateKeyError: If the Discord ID is already linked elsewhere
        """
        pass
