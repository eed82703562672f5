import json
from typing import Any, Optional
import redis.asyncio as redis

from common.core.config import settings
from .interface import CacheInterface
from common.core.otel_axiom_exporter import get_logger, trace_span

logger = get_logger(__name__)


class RedisCache(CacheInterface):
    """Redis-backed cache shared across API replicas. Values are stored as JSON."""

    def __init__(self):
        self._client: Optional[redis.Redis] = None
        self._connected = False

    @trace_span
    async def connect(self) -> bool:
        try:
            self._client = redis.Redis(
                host=settings.redis_host,
                port=settings.redis_port,
                password=settings.redis_password,
                db=settings.redis_db,
                decode_responses=True,
            )
            await self._client.ping()
            self._connected = True
            logger.info("Redis cache provider connected")
            return True
        except Exception as e:
            logger.error(f"Failed to connect to Redis cache: {e}")
            self._connected = False
            return False

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._connected = False
            logger.info("Redis cache provider disconnected")

    async def _ensure_connected(self) -> bool:
        if self._connected:
            return True
        return await self.connect()

    @trace_span
    async def get(self, key: str) -> Optional[Any]:
        if not await self._ensure_connected():
            return None

        try:
            value = await self._client.get(key)
            if value is None:
                return None
            return json.loads(value)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to deserialize cached value for key {key}: {e}")
            return None
        except redis.RedisError as e:
            logger.error(f"Error getting cache key {key}: {e}")
            return None

    @trace_span
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not await self._ensure_connected():
            return False

        try:
            serialized_value = json.dumps(value, default=str)
            if ttl:
                success = await self._client.setex(key, ttl, serialized_value)
            else:
                success = await self._client.set(key, serialized_value)
            logger.debug(f"Cached key {key} with TTL {ttl}")
            return bool(success)
        except (TypeError, redis.RedisError) as e:
            logger.error(f"Error setting cache key {key}: {e}")
            return False
