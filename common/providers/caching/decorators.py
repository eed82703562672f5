import functools
from typing import Callable, Type
from pydantic import BaseModel

from common.core.otel_axiom_exporter import get_logger
from .factory import get_cache_provider

logger = get_logger(__name__)


def cache(model_type: Type, ttl: int, key_generator: Callable[..., str]):
    """
    Cache decorator for async methods.

    The key generator receives the call arguments without ``self``. Cache
    failures never fail the call: on any cache error the wrapped function
    runs uncached.

    Args:
        model_type: Pydantic model type for (de)serialization, or a plain type
        ttl: Time to live in seconds
        key_generator: Builds the cache key from the call arguments
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            cache_key = None
            try:
                cache_key = key_generator(*args, **kwargs)
                cached_value = await get_cache_provider().get(cache_key)
                if cached_value is not None:
                    logger.debug(f"Cache hit for key: {cache_key}")
                    if issubclass(model_type, BaseModel):
                        if isinstance(cached_value, list):
                            return [
                                model_type.model_validate(item) for item in cached_value
                            ]
                        return model_type.model_validate(cached_value)
                    return cached_value
            except Exception as e:
                logger.warning(f"Cache lookup failed for {func.__name__}: {e}")

            logger.debug(f"Cache miss for {func.__name__} - executing function")
            result = await func(self, *args, **kwargs)

            if cache_key:
                try:
                    cache_value = result
                    if result is not None and issubclass(model_type, BaseModel):
                        if isinstance(result, list):
                            cache_value = [item.model_dump() for item in result]
                        else:
                            cache_value = result.model_dump()
                    await get_cache_provider().set(cache_key, cache_value, ttl)
                except Exception as e:
                    logger.warning(f"Cache set failed for key {cache_key}: {e}")

            return result

        return wrapper

    return decorator
