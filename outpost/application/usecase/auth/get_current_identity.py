"""Get current identity use case."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from outpost.application.usecase.base import BaseUseCase
from outpost.domain.service import SessionService


class GetCurrentIdentityRequest(BaseModel):
    """Get current identity request."""

    token: str  # Session token from cookie


class GetCurrentIdentityResponse(BaseModel):
    """Current identity as exposed to the frontend (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    steam_id: str | None
    steam_name: str | None
    is_fully_authenticated: bool


class GetCurrentIdentityUseCase(BaseUseCase):
    """Use case for reading the identity behind a session."""

    def __init__(self, session_service: SessionService) -> None:
        self.session_service = session_service

    async def execute(
        self, request: GetCurrentIdentityRequest
    ) -> GetCurrentIdentityResponse:
        """Resolve the session token to the current identity.

        Raises:
            JWTError: If the token is invalid or expired
            SessionIdentityNotFoundError: If the identity no longer exists
        """
        identity = await self.session_service.deserialize(request.token)

        return GetCurrentIdentityResponse(
            id=str(identity.id),
            steam_id=str(identity.steam_id) if identity.steam_id else None,
            steam_name=identity.steam_name,
            is_fully_authenticated=identity.is_fully_authenticated,
        )
