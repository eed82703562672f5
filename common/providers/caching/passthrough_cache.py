from typing import Any, Optional

from .interface import CacheInterface


class PassthroughCache(CacheInterface):
    """Cache that stores nothing; every lookup is a miss."""

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        return False
