"""Session domain service."""

from uuid import UUID

import logfire

from outpost.config import AuthSettings
from outpost.domain.error import NotFoundError, SessionIdentityNotFoundError
from outpost.domain.model import Identity
from outpost.domain.value import IdentityId
from outpost.util.jwt import JWTError, create_token, verify_token

from .base import Service
from .identity_service import IdentityService


class SessionService(Service):
    """Maps identities to browser sessions and back.

    Only the durable identity ID goes into the session; the full identity
    is reloaded on every request.
    """

    def __init__(
        self, auth_settings: AuthSettings, identity_service: IdentityService
    ) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
            identity_service: Identity domain service
        """
        self.auth_settings = auth_settings
        self.identity_service = identity_service

    def serialize(self, identity: Identity) -> str:
        """Create a session token for an identity.

        Args:
            identity: Authenticated identity

        Returns:
            Signed session token
        """
        with logfire.span("session_service.serialize", identity_id=str(identity.id)):
            token = create_token(str(identity.id), self.auth_settings)
            logfire.info("Session token created", identity_id=str(identity.id))
            return token

    async def deserialize(self, token: str) -> Identity:
        """Load the identity a session token refers to.

        Args:
            token: Session token from the cookie

        Returns:
            The session's identity

        Raises:
            JWTError: If there is no valid session (bad or expired token)
            SessionIdentityNotFoundError: If the identity no longer exists
        """
        with logfire.span("session_service.deserialize"):
            payload = verify_token(token, self.auth_settings)
            try:
                identity_id = IdentityId(UUID(payload.identity_id))
            except ValueError as e:
                raise JWTError("Invalid token") from e

            try:
                return await self.identity_service.get_by_id(identity_id)
            except NotFoundError:
                logfire.warn(
                    "Session refers to a missing identity",
                    identity_id=str(identity_id),
                )
                raise SessionIdentityNotFoundError(str(identity_id))
