import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from hotkeys.cache.base_manager import CacheBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResultCache:
    """
    Fail-open TTL cache used by the search engine.

    Every backend fault is logged and absorbed here: a failed read is a miss,
    a failed write or delete is a no-op. Only errors raised by a
    ``get_or_set`` factory reach the caller.
    """

    def __init__(self, backend: CacheBackend):
        self.backend = backend

    @property
    def backend_name(self) -> str:
        return self.backend.name

    async def get(self, key: str, as_type: Optional[Any] = None) -> Optional[Any]:
        try:
            return await self.backend.get(key, as_type)
        except Exception as e:
            logger.warning(f"⚠️ [ResultCache] get '{key}' failed: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: float) -> bool:
        try:
            await self.backend.set(key, value, ttl)
            return True
        except Exception as e:
            logger.warning(f"⚠️ [ResultCache] set '{key}' failed: {e}")
            return False

    async def remove(self, key: str) -> None:
        try:
            await self.backend.delete(key)
        except Exception as e:
            logger.warning(f"⚠️ [ResultCache] remove '{key}' failed: {e}")

    async def remove_prefix(self, prefix: str) -> int:
        try:
            return await self.backend.delete_prefix(prefix)
        except Exception as e:
            logger.warning(f"⚠️ [ResultCache] remove prefix '{prefix}' failed: {e}")
            return 0

    async def clear(self) -> None:
        try:
            await self.backend.clear()
        except Exception as e:
            logger.warning(f"⚠️ [ResultCache] clear failed: {e}")

    async def exists(self, key: str) -> bool:
        try:
            return await self.backend.exists(key)
        except Exception as e:
            logger.warning(f"⚠️ [ResultCache] exists '{key}' failed: {e}")
            return False

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        ttl: float,
        as_type: Optional[Any] = None,
    ) -> T:
        """Return the cached value for ``key`` or compute, store and return it."""
        cached = await self.get(key, as_type)
        if cached is not None:
            return cached

        value = await factory()
        await self.set(key, value, ttl)
        return value

    async def close(self) -> None:
        try:
            await self.backend.close()
        except Exception as e:
            logger.warning(f"⚠️ [ResultCache] close failed: {e}")
