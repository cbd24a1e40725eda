"""Repository interfaces for the Outpost domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from outpost.domain.repository.identity import IdentityRepository
from outpost.domain.repository.server_status import ServerStatusRepository

__all__ = [
    "IdentityRepository",
    "ServerStatusRepository",
]
