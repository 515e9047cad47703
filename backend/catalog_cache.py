"""
Catalog Cache
Holds the last successfully fetched release list for a short staleness window
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from config import DEFAULT_CACHE_TTL_SECONDS
from results import Result

logger = logging.getLogger(__name__)


def is_stale(now: float, fetched_at: Optional[float], ttl: float) -> bool:
    """True when nothing was fetched yet or the entry is at least ttl old"""
    if fetched_at is None:
        return True
    return now - fetched_at >= ttl


@dataclass(frozen=True)
class CatalogSnapshot:
    releases: tuple
    cached: bool


@dataclass(frozen=True)
class _Entry:
    releases: tuple
    fetched_at: float


class CatalogCache:
    """
    Single-entry cache in front of a CatalogFetcher

    The entry is replaced wholesale on every successful fetch. A failed
    fetch leaves the previous entry in place and is returned to the caller
    as-is; stale data is never served in its place.

    Refreshes are serialised with a lock: a request that waited for another
    thread's refresh reuses that result instead of fetching again.
    """

    def __init__(self, fetcher, ttl: float = DEFAULT_CACHE_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.fetcher = fetcher
        self.ttl = ttl
        self.clock = clock
        self._entry: Optional[_Entry] = None
        self._refresh_lock = threading.Lock()

    @property
    def fetched_at(self) -> Optional[float]:
        entry = self._entry
        return entry.fetched_at if entry else None

    def _fresh_entry(self) -> Optional[_Entry]:
        entry = self._entry
        if entry is None or is_stale(self.clock(), entry.fetched_at, self.ttl):
            return None
        return entry

    def get(self) -> Result:
        """
        Return the cached releases while fresh, otherwise refetch

        Returns:
            Result holding a CatalogSnapshot, or the fetcher's failure
        """
        entry = self._fresh_entry()
        if entry is not None:
            logger.debug("Serving releases from cache")
            return Result.success(CatalogSnapshot(entry.releases, cached=True))

        with self._refresh_lock:
            entry = self._fresh_entry()
            if entry is not None:
                return Result.success(CatalogSnapshot(entry.releases, cached=True))
            return self._refresh_locked()

    def refresh(self) -> Result:
        """Fetch regardless of staleness and replace the entry on success"""
        with self._refresh_lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> Result:
        logger.info("Catalog cache stale, fetching playlist")
        result = self.fetcher.fetch()
        if not result.ok:
            logger.error(f"Catalog fetch failed: {result.error}")
            return result

        releases = tuple(result.value)
        self._entry = _Entry(releases=releases, fetched_at=self.clock())
        return Result.success(CatalogSnapshot(releases, cached=False))
