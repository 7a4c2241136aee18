"""Time-bounded response cache for the documentation client.

Entries expire lazily: an entry older than the TTL is reported as absent on
lookup and overwritten by the next ``set``. The store is confined to a single
asyncio event loop and takes no locks.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600.0


@dataclass
class CacheEntry:
    value: Any
    fetched_at: float


class TTLCache:
    """In-memory key/value store with a fixed time-to-live."""

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("Cache TTL must be positive")
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._in_flight: Dict[str, asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self.clock() - entry.fetched_at < self.ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if never set or expired."""
        entry = self._entries.get(key)
        if entry is None or not self._is_fresh(entry):
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, fetched_at=self.clock())

    def invalidate(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    async def _load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        try:
            value = await loader()
            self.set(key, value)
            return value
        finally:
            self._in_flight.pop(key, None)

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value or load it, sharing concurrent loads.

        Callers that arrive while a load for ``key`` is pending await that
        same load and see its value or its exception. Failures are not cached.
        """
        value = self.get(key)
        if value is not None:
            logger.debug(f"Cache hit for {key}")
            return value

        pending = self._in_flight.get(key)
        if pending is None:
            logger.debug(f"Cache miss for {key}")
            pending = asyncio.ensure_future(self._load(key, loader))
            self._in_flight[key] = pending
        else:
            logger.debug(f"Joining in-flight load for {key}")

        # One caller being cancelled must not cancel the shared load.
        return await asyncio.shield(pending)
