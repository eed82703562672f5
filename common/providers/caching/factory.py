from typing import Optional

from common.core.config import settings
from common.core.constants import CacheProviderType
from common.core.otel_axiom_exporter import get_logger

from .interface import CacheInterface
from .memory_cache import MemoryCache
from .passthrough_cache import PassthroughCache
from .redis_cache import RedisCache

logger = get_logger(__name__)

# Global instance
_cache_provider: Optional[CacheInterface] = None


def get_cache_provider() -> CacheInterface:
    """
    Get the configured cache provider, created on first use.

    Returns:
        CacheInterface: The cache provider instance
    """
    global _cache_provider

    if _cache_provider is None:
        if settings.cache_provider == CacheProviderType.REDIS:
            _cache_provider = RedisCache()
        elif settings.cache_provider == CacheProviderType.PASSTHROUGH:
            _cache_provider = PassthroughCache()
        else:
            _cache_provider = MemoryCache()
        logger.info(f"Initialized {settings.cache_provider.value} cache provider")

    return _cache_provider


def set_cache_provider(provider: Optional[CacheInterface]) -> None:
    """Replace the global provider (None resets to the configured default)."""
    global _cache_provider
    _cache_provider = provider


async def close_cache_provider() -> None:
    """Release the global provider's connections on shutdown."""
    global _cache_provider

    if isinstance(_cache_provider, RedisCache):
        await _cache_provider.disconnect()
    _cache_provider = None
