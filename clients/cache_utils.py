"""In-memory TTL cache for async client calls"""
import asyncio
import time
from typing import Optional, Any, Callable, Dict, Tuple
from functools import wraps


class TTLCache:
    """Async-safe key/value store whose entries expire after ``ttl`` seconds"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._cache: Dict[str, Tuple[Any, float]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            value, expiry_time = entry
            if self._clock() < expiry_time:
                return value
            del self._cache[key]
            return None

    async def set(self, key: str, value: Any, ttl: float):
        async with self._lock:
            now = self._clock()
            # drop whatever expired so per-user keys do not pile up
            self._cache = {k: v for k, v in self._cache.items() if v[1] > now}
            self._cache[key] = (value, now + ttl)

    async def clear(self):
        async with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


def async_ttl_cache(ttl: Callable[[], float], cache: Optional[TTLCache] = None):
    """Cache async results per call arguments.

    ``ttl`` is read on every call so settings patched at runtime apply; a ttl
    of 0 or less bypasses the cache. The wrapped function gains
    ``clear_cache()`` and ``cache``.
    """
    cache = cache or TTLCache()

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            seconds = ttl()
            if seconds <= 0:
                return await func(*args, **kwargs)

            cache_key = f"{func.__qualname__}:{args!r}:{sorted(kwargs.items())!r}"
            cached_value = await cache.get(cache_key)
            if cached_value is not None:
                return cached_value

            result = await func(*args, **kwargs)
            await cache.set(cache_key, result, seconds)
            return result

        wrapper.clear_cache = cache.clear
        wrapper.cache = cache
        return wrapper

    return decorator
