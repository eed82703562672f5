from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheInterface(ABC):
    """Interface for cache providers."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: The cache key

        Returns:
            The cached value if present and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set a value in cache.

        Args:
            key: The cache key
            value: The value to cache, must be JSON serializable
            ttl: Time to live in seconds, None for no expiry

        Returns:
            True if set successfully, False otherwise
        """
        pass
