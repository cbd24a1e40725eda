"""In-memory identity repository for testing."""

from typing import Optional

from outpost.domain.error import DuplicateKeyError
from outpost.domain.model import Identity
from outpost.domain.repository import IdentityRepository
from outpost.domain.value import DiscordId, IdentityId, SteamId

_DISCORD_LINK_FIELDS = (
    "discord_id",
    "discord_name",
    "discord_avatar",
    "discord_email",
    "last_login",
    "updated_at",
)


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing.

    Mirrors the database's nullable-unique constraints on the provider keys.
    Dict order is insertion order, which breaks created_at ties in favour of
    the later insert.
    """

    def __init__(self) -> None:
        self._identities: dict[IdentityId, Identity] = {}

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID."""
        return self._identities.get(identity_id)

    async def find_by_steam_id(self, steam_id: SteamId) -> Optional[Identity]:
        """Find the identity linked to a Steam account."""
        for identity in self._identities.values():
            if identity.steam_id == steam_id:
                return identity
        return None

    async def find_by_discord_id(self, discord_id: DiscordId) -> Optional[Identity]:
        """Find the identity linked to a Discord account."""
        for identity in self._identities.values():
            if identity.discord_id == discord_id:
                return identity
        return None

    async def find_merge_candidate(self) -> Optional[Identity]:
        """Find the newest Steam-only identity."""
        newest: Optional[Identity] = None
        for identity in self._identities.values():
            if not identity.is_merge_candidate:
                continue
            if newest is None or identity.created_at >= newest.created_at:
                newest = identity
        return newest

    async def find_all(self) -> list[Identity]:
        """List every identity, oldest first."""
        return sorted(self._identities.values(), key=lambda i: i.created_at)

    def _check_unique(self, identity: Identity) -> None:
        for other in self._identities.values():
            if other.id == identity.id:
                continue
            if identity.steam_id is not None and other.steam_id == identity.steam_id:
                raise DuplicateKeyError("steam_id", str(identity.steam_id))
            if (
                identity.discord_id is not None
                and other.discord_id == identity.discord_id
            ):
                raise DuplicateKeyError("discord_id", str(identity.discord_id))

    async def save(self, identity: Identity) -> Identity:
        """Save or update an identity."""
        self._check_unique(identity)
        self._identities[identity.id] = identity
        return identity

    def _update_stored(self, identity: Identity, *fields: str) -> Optional[Identity]:
        # Copy only ``fields`` onto the stored row, like a column-list UPDATE
        stored = self._identities.get(identity.id)
        if stored is None:
            return None
        updated = stored.model_copy(
            update={field: getattr(identity, field) for field in fields}
        )
        self._identities[identity.id] = updated
        return updated

    async def refresh_steam_profile(self, identity: Identity) -> Optional[Identity]:
        """Update Steam profile fields on the stored identity."""
        return self._update_stored(
            identity,
            "steam_name",
            "steam_avatar",
            "steam_profile_url",
            "last_login",
            "updated_at",
        )

    async def refresh_discord_profile(
        self, identity: Identity
    ) -> Optional[Identity]:
        """Update Discord profile fields on the stored identity."""
        return self._update_stored(
            identity,
            "discord_name",
            "discord_avatar",
            "discord_email",
            "last_login",
            "updated_at",
        )

    async def link_discord(self, identity: Identity) -> bool:
        """Attach Discord fields whatever the stored identity holds."""
        if identity.id not in self._identities:
            return False
        self._check_unique(identity)
        self._update_stored(identity, *_DISCORD_LINK_FIELDS)
        return True

    async def link_discord_if_unlinked(self, identity: Identity) -> bool:
        """Attach Discord fields only while the stored row is Steam-only."""
        stored = self._identities.get(identity.id)
        if stored is None or not stored.is_merge_candidate:
            return False

        self._check_unique(identity)
        self._update_stored(identity, *_DISCORD_LINK_FIELDS)
        return True
