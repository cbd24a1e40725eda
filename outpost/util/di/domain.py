"""Domain layer DI providers."""

from dishka import Scope, provide

from outpost.config import AuthSettings
from outpost.domain.repository import IdentityRepository, ServerStatusRepository
from outpost.domain.service import (
    AuthService,
    IdentityLinkService,
    IdentityService,
    OAuthClient,
    ServerStatusService,
    SessionService,
)
from outpost.domain.value import AuthProvider
from outpost.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped so they share the request's repositories
    and database transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide authentication domain service for Steam and Discord."""
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_identity_service(
        self, identity_repository: IdentityRepository
    ) -> IdentityService:
        """Provide identity lookup service."""
        return IdentityService(identity_repository=identity_repository)

    @provide
    def get_identity_link_service(
        self, identity_repository: IdentityRepository, auth_settings: AuthSettings
    ) -> IdentityLinkService:
        """Provide identity link service using the configured link strategy."""
        return IdentityLinkService(
            identity_repository=identity_repository, auth_settings=auth_settings
        )

    @provide
    def get_session_service(
        self, auth_settings: AuthSettings, identity_service: IdentityService
    ) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            auth_settings=auth_settings, identity_service=identity_service
        )

    @provide
    def get_server_status_service(
        self, server_status_repository: ServerStatusRepository
    ) -> ServerStatusService:
        """Provide server status service."""
        return ServerStatusService(server_status_repository=server_status_repository)
