"""Identity aggregate root.

An identity is one player account, reachable through a Steam login, a
Discord login, or both once the two have been linked.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import Field, computed_field

from outpost.domain.error import BusinessRuleViolationError
from outpost.domain.model.common import DomainModel
from outpost.domain.value import (
    DiscordId,
    DiscordProfile,
    IdentityId,
    SteamId,
    SteamProfile,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Identity(DomainModel):
    """Player identity keyed by up to two external provider accounts.

    Profile fields are denormalised copies of what the provider last
    returned and are overwritten on every login through that provider.
    """

    id: IdentityId

    steam_id: Optional[SteamId] = None
    steam_name: Optional[str] = None
    steam_avatar: Optional[str] = None
    steam_profile_url: Optional[str] = None

    discord_id: Optional[DiscordId] = None
    discord_name: Optional[str] = None  # username#discriminator
    discord_avatar: Optional[str] = None
    discord_email: Optional[str] = None

    last_login: datetime = Field(default_factory=_now)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @computed_field
    @property
    def is_fully_authenticated(self) -> bool:
        """True iff both provider accounts are linked.

        Derived from the keys on every access, so it can never go stale.
        """
        return self.steam_id is not None and self.discord_id is not None

    @property
    def is_merge_candidate(self) -> bool:
        """Steam-only identity that a new Discord login may claim."""
        return self.steam_id is not None and self.discord_id is None

    @classmethod
    def from_steam(cls, profile: SteamProfile, now: datetime) -> "Identity":
        """Create a new Steam-only identity."""
        return cls(
            id=IdentityId(uuid4()),
            steam_id=profile.steam_id,
            steam_name=profile.display_name,
            steam_avatar=profile.avatar_url,
            steam_profile_url=profile.profile_url,
            last_login=now,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_discord(cls, profile: DiscordProfile, now: datetime) -> "Identity":
        """Create a new Discord-only identity."""
        return cls(
            id=IdentityId(uuid4()),
            discord_id=profile.discord_id,
            discord_name=profile.display_name,
            discord_avatar=profile.avatar,
            discord_email=profile.email,
            last_login=now,
            created_at=now,
            updated_at=now,
        )

    def apply_steam_login(self, profile: SteamProfile, now: datetime) -> "Identity":
        """Refresh Steam profile fields after a repeat Steam login."""
        if self.steam_id != profile.steam_id:
            raise BusinessRuleViolationError(
                f"Steam login {profile.steam_id} does not belong to identity {self.id}"
            )
        return self.model_copy(
            update={
                "steam_name": profile.display_name,
                "steam_avatar": profile.avatar_url,
                "steam_profile_url": profile.profile_url,
                "last_login": now,
                "updated_at": now,
            }
        )

    def apply_discord_login(
        self, profile: DiscordProfile, now: datetime
    ) -> "Identity":
        """Refresh Discord profile fields after a repeat Discord login."""
        if self.discord_id != profile.discord_id:
            raise BusinessRuleViolationError(
                f"Discord login {profile.discord_id} does not belong to identity {self.id}"
            )
        return self.model_copy(
            update={
                "discord_name": profile.display_name,
                "discord_avatar": profile.avatar,
                "discord_email": profile.email,
                "last_login": now,
                "updated_at": now,
            }
        )

    def link_discord(self, profile: DiscordProfile, now: datetime) -> "Identity":
        """Attach a Discord account to this Steam-only identity."""
        if not self.is_merge_candidate:
            raise BusinessRuleViolationError(
                f"Identity {self.id} cannot absorb a Discord link"
            )
        return self.model_copy(
            update={
                "discord_id": profile.discord_id,
                "discord_name": profile.display_name,
                "discord_avatar": profile.avatar,
                "discord_email": profile.email,
                "last_login": now,
                "updated_at": now,
            }
        )
