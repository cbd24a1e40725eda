"""Login use case."""

import logfire
from pydantic import BaseModel

from outpost.application.usecase.base import BaseUseCase
from outpost.domain.service import AuthService, IdentityLinkService, SessionService
from outpost.domain.value import AuthProvider, LinkAction


class LoginRequest(BaseModel):
    """Login request from a provider callback.

    ``params`` is the callback's full query string: OpenID 2.0 signs a
    variable set of ``openid.*`` fields, so nothing is picked out here.
    """

    provider: AuthProvider
    params: dict[str, str]


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    identity_id: str
    action: LinkAction
    is_fully_authenticated: bool


class LoginUseCase(BaseUseCase):
    """Use case for completing a Steam or Discord login."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        session_service: SessionService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service (provider exchange)
            identity_link_service: Create/update/merge policy for identities
            session_service: Session token domain service
        """
        self.auth_service = auth_service
        self.identity_link_service = identity_link_service
        self.session_service = session_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Steps:
        1. Verify the callback with the provider and fetch the profile
        2. Resolve the profile to an identity (create, update or merge)
        3. Issue a session token for the identity

        Args:
            request: Login request with callback parameters

        Returns:
            Login response with session token and identity info

        Raises:
            ProviderError: If the provider exchange fails
            LinkConflictError: If linking kept losing races
            PersistenceError: If storage fails
        """
        with logfire.span("login.execute", provider=request.provider.value):
            profile = await self.auth_service.complete_login(
                request.provider, request.params
            )

            outcome = await self.identity_link_service.resolve(profile)
            identity = outcome.identity

            token = self.session_service.serialize(identity)

            logfire.info(
                "Login completed",
                provider=request.provider.value,
                identity_id=str(identity.id),
                action=outcome.action.value,
                fully_authenticated=identity.is_fully_authenticated,
            )

            return LoginResponse(
                token=token,
                identity_id=str(identity.id),
                action=outcome.action,
                is_fully_authenticated=identity.is_fully_authenticated,
            )
