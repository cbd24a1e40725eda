"""Identity linking domain service.

Resolves every successful Steam or Discord login to exactly one Identity,
creating, refreshing or merging records as needed.

Merge policy: a Discord account with no identity of its own is attached to
the most recently created Steam-only identity. Nothing binds the two logins
together beyond recency, so any Discord login can claim the newest unlinked
Steam account. The ``guarded`` strategy only stops two Discord accounts from
claiming the same Steam identity at once; it does not close that gap.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import logfire

from outpost.config import AuthSettings
from outpost.domain.error import DuplicateKeyError, LinkConflictError
from outpost.domain.model import Identity
from outpost.domain.repository import IdentityRepository
from outpost.domain.value import (
    DiscordProfile,
    LinkAction,
    ProviderProfile,
    SteamProfile,
)

from .base import Service


@dataclass(frozen=True)
class LinkOutcome:
    """Identity a login resolved to, and what was done to it."""

    identity: Identity
    action: LinkAction


class IdentityLinkService(Service):
    """Domain service applying the create/update/merge policy for logins."""

    def __init__(
        self,
        identity_repository: IdentityRepository,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize identity link service.

        Args:
            identity_repository: Identity repository
            auth_settings: Authentication settings (link strategy, attempts)
            clock: Source of "now" (defaults to UTC wall clock)
        """
        self.identity_repository = identity_repository
        self.guarded = auth_settings.link_strategy == "guarded"
        # Unguarded mode never retries
        self.max_attempts = (
            max(1, auth_settings.max_link_attempts) if self.guarded else 1
        )
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def strategy(self) -> str:
        return "guarded" if self.guarded else "unguarded"

    async def resolve(self, profile: ProviderProfile) -> LinkOutcome:
        """Resolve a provider profile to an identity.

        Raises:
            LinkConflictError: If concurrent logins kept colliding
            PersistenceError: If storage fails
        """
        if isinstance(profile, SteamProfile):
            return await self.resolve_steam(profile)
        if isinstance(profile, DiscordProfile):
            return await self.resolve_discord(profile)
        raise ValueError(f"Unsupported provider profile: {type(profile).__name__}")

    async def resolve_steam(self, profile: SteamProfile) -> LinkOutcome:
        """Resolve a Steam login.

        Known Steam ID: refresh the Steam profile and last_login. Unknown:
        create a Steam-only identity. The Discord side is never touched.

        Args:
            profile: Steam profile from the completed OpenID login

        Returns:
            Link outcome (created or updated)

        Raises:
            LinkConflictError: If the Steam ID collided on every attempt
        """
        with logfire.span(
            "identity_link_service.resolve_steam",
            steam_id=str(profile.steam_id),
            strategy=self.strategy,
        ):
            for attempt in range(1, self.max_attempts + 1):
                try:
                    return await self._resolve_steam_once(profile)
                except DuplicateKeyError as e:
                    # A concurrent first login inserted the same Steam ID
                    logfire.warn(
                        "Steam identity write collided",
                        steam_id=str(profile.steam_id),
                        attempt=attempt,
                        field=e.field,
                    )

            raise LinkConflictError(
                f"Could not resolve Steam account {profile.steam_id} "
                f"after {self.max_attempts} attempt(s)"
            )

    async def _resolve_steam_once(self, profile: SteamProfile) -> LinkOutcome:
        now = self._clock()
        existing = await self.identity_repository.find_by_steam_id(profile.steam_id)

        if existing:
            refreshed = await self.identity_repository.refresh_steam_profile(
                existing.apply_steam_login(profile, now)
            )
            if refreshed is not None:
                logfire.info(
                    "Steam login refreshed identity",
                    identity_id=str(refreshed.id),
                    steam_id=str(profile.steam_id),
                )
                return LinkOutcome(identity=refreshed, action=LinkAction.UPDATED)
            # Deleted since the lookup: fall through and recreate

        created = await self.identity_repository.save(
            Identity.from_steam(profile, now)
        )
        logfire.info(
            "Steam login created identity",
            identity_id=str(created.id),
            steam_id=str(profile.steam_id),
        )
        return LinkOutcome(identity=created, action=LinkAction.CREATED)

    async def resolve_discord(self, profile: DiscordProfile) -> LinkOutcome:
        """Resolve a Discord login.

        Steps:
        1. Known Discord ID: refresh the Discord profile and last_login
        2. Otherwise pick the newest Steam-only identity and attach Discord
        3. No candidate: create a Discord-only identity

        In guarded mode step 2 is a conditional write; if another login
        claimed the candidate first, the whole resolution is retried.

        Args:
            profile: Discord profile from the completed OAuth login

        Returns:
            Link outcome (created, updated or merged)

        Raises:
            LinkConflictError: If every attempt lost a race
        """
        with logfire.span(
            "identity_link_service.resolve_discord",
            discord_id=str(profile.discord_id),
            strategy=self.strategy,
        ):
            for attempt in range(1, self.max_attempts + 1):
                try:
                    outcome = await self._resolve_discord_once(profile)
                except DuplicateKeyError as e:
                    logfire.warn(
                        "Discord identity write collided",
                        discord_id=str(profile.discord_id),
                        attempt=attempt,
                        field=e.field,
                    )
                    continue

                if outcome is not None:
                    return outcome

                logfire.warn(
                    "Merge candidate claimed by a concurrent login, reselecting",
                    discord_id=str(profile.discord_id),
                    attempt=attempt,
                )

            raise LinkConflictError(
                f"Could not link Discord account {profile.discord_id} "
                f"after {self.max_attempts} attempt(s)"
            )

    async def _resolve_discord_once(
        self, profile: DiscordProfile
    ) -> LinkOutcome | None:
        """Run one resolution pass; None means the merge write lost a race."""
        now = self._clock()
        existing = await self.identity_repository.find_by_discord_id(
            profile.discord_id
        )

        if existing:
            refreshed = await self.identity_repository.refresh_discord_profile(
                existing.apply_discord_login(profile, now)
            )
            if refreshed is not None:
                logfire.info(
                    "Discord login refreshed identity",
                    identity_id=str(refreshed.id),
                    discord_id=str(profile.discord_id),
                    fully_authenticated=refreshed.is_fully_authenticated,
                )
                return LinkOutcome(identity=refreshed, action=LinkAction.UPDATED)

        candidate = await self.identity_repository.find_merge_candidate()

        if candidate is None:
            created = await self.identity_repository.save(
                Identity.from_discord(profile, now)
            )
            logfire.info(
                "Discord login created identity",
                identity_id=str(created.id),
                discord_id=str(profile.discord_id),
            )
            return LinkOutcome(identity=created, action=LinkAction.CREATED)

        linked = candidate.link_discord(profile, now)

        if self.guarded:
            if not await self.identity_repository.link_discord_if_unlinked(linked):
                return None
        elif not await self.identity_repository.link_discord(linked):
            return None

        logfire.info(
            "Discord account merged into Steam identity",
            identity_id=str(linked.id),
            steam_id=str(linked.steam_id),
            discord_id=str(profile.discord_id),
        )
        return LinkOutcome(identity=linked, action=LinkAction.MERGED)
