#!/usr/bin/env python3

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..core.models import CatalogSnapshot

logger = logging.getLogger(__name__)

DEFAULT_CACHE_EXPIRY = 3600  # 1 hour


class ReadWriteLock:
    """Many concurrent readers or a single writer"""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    def acquire_read(self) -> None:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            while self._writing or self._readers > 0:
                self._cond.wait()
            self._writing = True

    def release_write(self) -> None:
        with self._cond:
            self._writing = False
            self._cond.notify_all()


@dataclass(frozen=True)
class CacheEntry:
    snapshot: CatalogSnapshot
    fetched_at: float
    include_prerelease: bool


class VersionCache:
    """
    Time-boxed in-memory cache of the release catalog.

    Holds a single entry. The entry is reused only while it is younger than
    the expiry and was fetched with the same prerelease flag as the request.
    A failed refresh leaves the previous entry in place.
    """

    def __init__(
        self,
        fetch: Callable[[bool], CatalogSnapshot],
        cache_expiry: float = DEFAULT_CACHE_EXPIRY,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch = fetch
        self.cache_expiry = cache_expiry
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entry: Optional[CacheEntry] = None

    def _is_valid(self, entry: Optional[CacheEntry], include_prerelease: bool) -> bool:
        return (
            entry is not None
            and self._clock() - entry.fetched_at < self.cache_expiry
            and entry.include_prerelease == include_prerelease
        )

    def get_snapshot(self, include_prerelease: bool = False) -> CatalogSnapshot:
        """Return the cached catalog, fetching it when missing or stale"""
        self._lock.acquire_read()
        try:
            entry = self._entry
            if self._is_valid(entry, include_prerelease):
                logger.debug("Using cached release list (%d entries)", len(entry.snapshot))
                return entry.snapshot
        finally:
            self._lock.release_read()

        # FetchError propagates and the old entry stays untouched
        snapshot = self._fetch(include_prerelease)

        self._lock.acquire_write()
        try:
            self._entry = CacheEntry(snapshot, self._clock(), include_prerelease)
        finally:
            self._lock.release_write()

        return snapshot

    def clear(self) -> None:
        """Drop the cached entry"""
        self._lock.acquire_write()
        try:
            self._entry = None
        finally:
            self._lock.release_write()

    def status(self, include_prerelease: bool = False) -> Dict[str, Any]:
        """Get information about the cache entry"""
        self._lock.acquire_read()
        try:
            entry = self._entry
            info = {
                "exists": entry is not None,
                "age_seconds": None,
                "expiry_seconds": self.cache_expiry,
                "entries": 0,
                "includes_prerelease": None,
                "requested_prerelease": include_prerelease,
                "valid": self._is_valid(entry, include_prerelease),
            }
            if entry is not None:
                info["age_seconds"] = self._clock() - entry.fetched_at
                info["entries"] = len(entry.snapshot)
                info["includes_prerelease"] = entry.include_prerelease
            return info
        finally:
            self._lock.release_read()
