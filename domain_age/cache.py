"""
In-memory TTL cache of lookup results, keyed by domain.
"""
import asyncio
import logging
import threading
import time
from typing import Callable, Optional

from cachetools import TTLCache

from domain_age.contracts import DomainResult

logger = logging.getLogger(__name__)


class ResultCache:
    """Thread-safe wrapper around cachetools.TTLCache.

    Entries expire lazily on access; sweep_forever() also drops them on a
    fixed interval so idle domains do not sit in memory until the next write.
    """

    def __init__(self, ttl: float, maxsize: int = 10000,
                 timer: Callable[[], float] = time.monotonic):
        self._entries = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._entries.ttl

    def get(self, domain: str) -> Optional[DomainResult]:
        with self._lock:
            return self._entries.get(domain)

    def set(self, domain: str, result: DomainResult) -> None:
        with self._lock:
            self._entries[domain] = result

    def expire(self) -> int:
        """Drop expired entries now. Returns how many were dropped."""
        with self._lock:
            before = len(self._entries)
            self._entries.expire()
            return before - len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def sweep_forever(self, interval: float) -> None:
        """Background sweep; runs until cancelled."""
        while True:
            await asyncio.sleep(interval)
            dropped = self.expire()
            if dropped:
                logger.info("Cache sweep dropped %d expired entries", dropped)
