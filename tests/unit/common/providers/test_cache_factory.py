from unittest.mock import AsyncMock

from common.providers.caching import (
    MemoryCache,
    RedisCache,
    close_cache_provider,
    get_cache_provider,
    set_cache_provider,
)


class TestCloseCacheProvider:
    async def test_disconnects_redis_client(self):
        redis_cache = RedisCache()
        client = AsyncMock()
        redis_cache._client = client
        redis_cache._connected = True
        set_cache_provider(redis_cache)

        await close_cache_provider()

        client.aclose.assert_awaited_once()
        assert not redis_cache._connected

    async def test_resets_global_provider(self, memory_cache):
        assert get_cache_provider() is memory_cache

        await close_cache_provider()

        assert get_cache_provider() is not memory_cache

    async def test_memory_provider_is_dropped_without_error(self):
        set_cache_provider(MemoryCache())

        await close_cache_provider()
