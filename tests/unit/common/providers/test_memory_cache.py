from common.providers.caching import MemoryCache, PassthroughCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestMemoryCache:
    async def test_get_missing_key_returns_none(self):
        cache = MemoryCache()
        assert await cache.get("missing") is None

    async def test_set_then_get(self):
        cache = MemoryCache()
        assert await cache.set("k", ["a", "b"], ttl=60)
        assert await cache.get("k") == ["a", "b"]

    async def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        await cache.set("k", "v", ttl=300)

        clock.now += 299
        assert await cache.get("k") == "v"

        clock.now += 1
        assert await cache.get("k") is None

    async def test_no_ttl_never_expires(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        await cache.set("k", "v")
        clock.now += 10**9
        assert await cache.get("k") == "v"


class TestPassthroughCache:
    async def test_never_stores(self):
        cache = PassthroughCache()
        assert await cache.set("k", "v", ttl=60) is False
        assert await cache.get("k") is None
