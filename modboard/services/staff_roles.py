from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Iterable

from modboard.core.exceptions import CacheRefreshError

logger = logging.getLogger(__name__)

StaffRoleFetcher = Callable[[], Awaitable[Iterable[int]]]


class StaffRoleCache:
    """Process-wide snapshot of the role IDs that count as staff.

    The snapshot is replaced lazily once it is older than ``ttl_seconds``.
    Concurrent misses may each refresh; every refresh converges on the same
    set, so no lock is taken.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        *,
        clock: Callable[[], float] = time.monotonic,
        serve_stale: bool = True,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.serve_stale = serve_stale
        self._clock = clock
        self._snapshot: frozenset[int] | None = None
        self._refreshed_at: float | None = None

    @property
    def snapshot(self) -> frozenset[int] | None:
        return self._snapshot

    @property
    def last_refreshed_at(self) -> float | None:
        return self._refreshed_at

    def is_fresh(self) -> bool:
        if self._snapshot is None or self._refreshed_at is None:
            return False
        return self._clock() - self._refreshed_at < self.ttl_seconds

    def invalidate(self) -> None:
        self._snapshot = None
        self._refreshed_at = None

    async def get(self, fetch: StaffRoleFetcher) -> frozenset[int]:
        if self.is_fresh():
            return self._snapshot

        try:
            role_ids = await fetch()
        except Exception as exc:
            if self._snapshot is not None and self.serve_stale:
                logger.warning(
                    "Staff role refresh failed, serving stale snapshot",
                    extra={"error": str(exc), "role_count": len(self._snapshot)},
                )
                return self._snapshot
            raise CacheRefreshError(details={"error": str(exc)}) from exc

        snapshot = frozenset(int(role_id) for role_id in role_ids)
        self._snapshot = snapshot
        self._refreshed_at = self._clock()
        logger.info("Staff role snapshot refreshed", extra={"role_count": len(snapshot)})
        return snapshot
