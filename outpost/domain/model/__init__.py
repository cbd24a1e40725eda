"""Domain model entities for Outpost."""

from outpost.domain.model.identity import Identity
from outpost.domain.model.server_status import ServerStatus

__all__ = [
    "Identity",
    "ServerStatus",
]
