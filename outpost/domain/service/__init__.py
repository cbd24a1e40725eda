"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_link_service import IdentityLinkService, LinkOutcome
from .identity_service import IdentityService
from .server_status_service import ServerStatusService
from .session_service import SessionService

__all__ = [
    "AuthService",
    "IdentityLinkService",
    "IdentityService",
    "LinkOutcome",
    "OAuthClient",
    "ServerStatusService",
    "Service",
    "SessionService",
]
