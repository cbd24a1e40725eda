"""Outstanding login states shared by the provider clients.

States live in process memory: a callback must reach the worker that
started the login.
"""

import time
from typing import Callable

import logfire

STATE_TTL_SECONDS = 10 * 60
MAX_PENDING_STATES = 10_000


class PendingStates:
    """Single-use login nonces that expire after ``ttl_seconds``.

    Abandoned logins are pruned on every ``add``; past ``max_size`` the
    oldest states are dropped first.
    """

    def __init__(
        self,
        ttl_seconds: float = STATE_TTL_SECONDS,
        max_size: int = MAX_PENDING_STATES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self.clock = clock
        # Insertion order is issue order
        self._issued: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._issued)

    def add(self, state: str) -> None:
        now = self.clock()
        self._prune(now)
        self._issued.pop(state, None)
        self._issued[state] = now

    def consume(self, state: str | None) -> bool:
        """Remove ``state`` and report whether it was issued and still fresh."""
        if not state:
            return False
        issued = self._issued.pop(state, None)
        return issued is not None and self.clock() - issued <= self.ttl_seconds

    def _prune(self, now: float) -> None:
        expired = [
            state
            for state, issued in self._issued.items()
            if now - issued > self.ttl_seconds
        ]
        for state in expired:
            del self._issued[state]

        overflow = len(self._issued) - self.max_size + 1
        if overflow > 0:
            for state in list(self._issued)[:overflow]:
                del self._issued[state]
            logfire.warn("Pending login states over capacity", dropped=overflow)
