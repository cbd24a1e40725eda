"""Identity lookup domain service."""

import logfire

from outpost.domain.error import NotFoundError
from outpost.domain.model import Identity
from outpost.domain.repository import IdentityRepository
from outpost.domain.value import IdentityId


class IdentityService:
    """Domain service for reading identities."""

    def __init__(self, identity_repository: IdentityRepository) -> None:
        """Initialize identity service.

        Args:
            identity_repository: Identity repository
        """
        self.identity_repository = identity_repository

    async def find_by_id(self, identity_id: IdentityId) -> Identity | None:
        """Get identity by ID, or None."""
        with logfire.span(
            "identity_service.find_by_id", identity_id=str(identity_id)
        ):
            identity = await self.identity_repository.find_by_id(identity_id)
            if identity:
                logfire.info(
                    "Identity found",
                    identity_id=str(identity_id),
                    fully_authenticated=identity.is_fully_authenticated,
                )
            else:
                logfire.warn("Identity not found", identity_id=str(identity_id))
            return identity

    async def get_by_id(self, identity_id: IdentityId) -> Identity:
        """Get identity by ID.

        Raises:
            NotFoundError: If identity not found
        """
        identity = await self.find_by_id(identity_id)
        if not identity:
            raise NotFoundError("Identity", str(identity_id))
        return identity
