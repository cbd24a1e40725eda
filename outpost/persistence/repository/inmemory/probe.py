"""Database probe for tests that run without a database."""

from outpost.persistence.database import DatabaseProbe


class InMemoryDatabaseProbe(DatabaseProbe):
    """Probe reporting a fixed connectivity status."""

    def __init__(self, connected: bool = True) -> None:
        self.connected = connected

    async def status(self) -> str:
        return "connected" if self.connected else "disconnected"
