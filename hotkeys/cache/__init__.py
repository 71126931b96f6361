from hotkeys.cache.base_manager import CacheBackend, CacheBackendError
from hotkeys.cache.cache_keys import CacheKeys
from hotkeys.cache.memory_cache import MemoryCacheBackend
from hotkeys.cache.redis_cache import RedisCacheBackend
from hotkeys.cache.result_cache import ResultCache
from hotkeys.config import Settings


def create_cache_backend(settings: Settings) -> CacheBackend:
    """Pick the backend named in settings. Called once at construction."""
    if settings.cache_backend == "redis":
        return RedisCacheBackend(
            url=settings.redis_url,
            key_prefix=settings.redis_key_prefix,
            timeout=settings.redis_timeout,
            retry_after=settings.redis_retry_after,
        )
    return MemoryCacheBackend()


__all__ = [
    "CacheBackend",
    "CacheBackendError",
    "CacheKeys",
    "MemoryCacheBackend",
    "RedisCacheBackend",
    "ResultCache",
    "create_cache_backend",
]
