import time
from typing import Any, Callable, Optional, Dict
from dataclasses import dataclass

from .interface import CacheInterface
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """A cached value with an optional absolute expiry."""

    value: Any
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        if self.expires_at is None:
            return False
        return now >= self.expires_at


class MemoryCache(CacheInterface):
    """Process-wide in-memory cache.

    Entries are evicted lazily on read. The clock is injectable so expiry can
    be driven deterministically.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._cache: Dict[str, CacheEntry] = {}
        self._clock = clock
        logger.info("Memory cache provider initialized")

    async def get(self, key: str) -> Optional[Any]:
        entry = self._cache.get(key)

        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._cache[key]
            logger.debug(f"Cache key {key} expired")
            return None

        return entry.value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        expires_at = self._clock() + ttl if ttl else None
        self._cache[key] = CacheEntry(value=value, expires_at=expires_at)
        logger.debug(f"Cached key {key} with TTL {ttl}")
        return True
