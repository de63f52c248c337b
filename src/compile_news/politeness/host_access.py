"""Per-host next-access times shared across a crawl run."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class HostAccessClock:
    """
    Tracks, per robots.txt URL, the earliest time the next request may be sent.

    Entries are created on first use and never removed. ``reserve`` checks and
    updates an entry under that entry's own lock, so two concurrent requests to
    the same host can never both see it as free.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._next_access_times: dict[str, float] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(key, threading.Lock())

    def reserve(self, key: str, crawl_delay: float, max_wait: float) -> Optional[float]:
        """
        Claim the next access slot for ``key``.

        Returns the number of seconds the caller must wait before sending its
        request, or None if that wait would exceed ``max_wait``; a refused
        reservation leaves the entry untouched.
        """
        with self._lock_for(key):
            now = self._clock()
            next_allowed = self._next_access_times.get(key)
            wait = 0.0 if next_allowed is None else max(0.0, next_allowed - now)
            if wait > max_wait:
                return None
            self._next_access_times[key] = now + wait + crawl_delay
            return wait

    def next_access_time(self, key: str) -> Optional[float]:
        return self._next_access_times.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._next_access_times

    def __len__(self) -> int:
        return len(self._next_access_times)
