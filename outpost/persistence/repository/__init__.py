"""PostgreSQL repository implementations."""

from outpost.persistence.repository.identity import PostgresIdentityRepository
from outpost.persistence.repository.server_status import (
    PostgresServerStatusRepository,
)

__all__ = [
    "PostgresIdentityRepository",
    "PostgresServerStatusRepository",
]
