"""Game server status entity.

Rows are written by the external status poller; this service only reads them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from outpost.domain.model.common import DomainModel
from outpost.domain.value import ServerStatusId


class ServerStatus(DomainModel):
    """Last known state of one community game server."""

    id: ServerStatusId
    name: str
    address: str
    port: int = Field(ge=1, le=65535)
    map_name: Optional[str] = None
    player_count: int = Field(default=0, ge=0)
    max_players: int = Field(default=0, ge=0)
    is_online: bool = False
    is_active: bool = True  # Inactive servers are hidden from listings
    last_checked: Optional[datetime] = None
