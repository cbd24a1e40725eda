"""Application layer DI providers."""

from dishka import Scope, provide

from outpost.application.usecase.auth import GetCurrentIdentityUseCase, LoginUseCase
from outpost.application.usecase.server import ListServersUseCase
from outpost.domain.service import (
    AuthService,
    IdentityLinkService,
    ServerStatusService,
    SessionService,
)
from outpost.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        session_service: SessionService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            identity_link_service=identity_link_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_identity_use_case(
        self, session_service: SessionService
    ) -> GetCurrentIdentityUseCase:
        """Provide get current identity use case."""
        return GetCurrentIdentityUseCase(session_service=session_service)

    @provide(scope=Scope.REQUEST)
    def get_list_servers_use_case(
        self, server_status_service: ServerStatusService
    ) -> ListServersUseCase:
        """Provide list servers use case."""
        return ListServersUseCase(server_status_service=server_status_service)
