"""In-memory repository implementations for testing."""

from .identity import InMemoryIdentityRepository
from .probe import InMemoryDatabaseProbe
from .server_status import InMemoryServerStatusRepository

__all__ = [
    "InMemoryDatabaseProbe",
    "InMemoryIdentityRepository",
    "InMemoryServerStatusRepository",
]
