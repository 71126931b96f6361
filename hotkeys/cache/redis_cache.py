import asyncio
import json
import logging
import time
from typing import Any, Callable, Optional

import redis.asyncio as redis
from pydantic import TypeAdapter
from redis.exceptions import RedisError

from hotkeys.cache.base_manager import CacheBackendError

logger = logging.getLogger(__name__)

# Serializes lists of pydantic models, dicts of them and plain values alike
_ANY = TypeAdapter(Any)


class RedisCacheBackend:
    """Redis-backed TTL store (``redis.asyncio``).

    Keys are namespaced with ``key_prefix`` so ``clear()`` only removes this
    engine's entries. Values travel as JSON and are decoded to ``as_type``
    when the caller supplies one. Redis evicts expired keys itself.

    A failed connection attempt is remembered for ``retry_after`` seconds;
    until then every call fails at once instead of waiting on the network.
    """

    name = "redis"

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        key_prefix: str = "hotkeys:",
        timeout: float = 3.0,
        retry_after: float = 30.0,
        client: Optional[Any] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.url = url
        self.key_prefix = key_prefix
        self.timeout = timeout
        self.retry_after = retry_after
        self.client: Optional[Any] = client
        self._clock = clock
        self._down_until = 0.0
        self._init_lock = asyncio.Lock()

    async def _ensure_client(self) -> Any:
        if self.client is not None:
            return self.client
        async with self._init_lock:
            if self.client is not None:
                return self.client

            if self._clock() < self._down_until:
                raise CacheBackendError(f"Redis at {self.url} marked down, retrying later")

            client = redis.Redis.from_url(
                self.url,
                socket_connect_timeout=self.timeout,
                socket_timeout=self.timeout,
            )
            try:
                await client.ping()
            except RedisError as e:
                self._down_until = self._clock() + self.retry_after
                await client.aclose()
                logger.error(f"❌ [RedisCache] {self.url} unavailable, retry in {self.retry_after:.0f}s: {e}")
                raise CacheBackendError(f"Redis unavailable at {self.url}: {e}") from e

            logger.info(f"🐳 [RedisCache] connected to {self.url}")
            self.client = client
        return self.client

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str, as_type: Optional[Any] = None) -> Optional[Any]:
        client = await self._ensure_client()
        try:
            raw = await client.get(self._key(key))
        except RedisError as e:
            raise CacheBackendError(f"get '{key}' failed: {e}") from e
        if raw is None:
            return None
        if as_type is not None:
            return TypeAdapter(as_type).validate_json(raw)
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: float) -> None:
        client = await self._ensure_client()
        payload = _ANY.dump_json(value, by_alias=True)
        try:
            await client.set(self._key(key), payload, px=max(1, int(ttl * 1000)))
        except RedisError as e:
            raise CacheBackendError(f"set '{key}' failed: {e}") from e

    async def delete(self, key: str) -> None:
        client = await self._ensure_client()
        try:
            await client.delete(self._key(key))
        except RedisError as e:
            raise CacheBackendError(f"delete '{key}' failed: {e}") from e

    async def delete_prefix(self, prefix: str) -> int:
        client = await self._ensure_client()
        removed = 0
        try:
            async for full_key in client.scan_iter(match=f"{self._key(prefix)}*"):
                removed += await client.delete(full_key)
        except RedisError as e:
            raise CacheBackendError(f"delete prefix '{prefix}' failed: {e}") from e
        return removed

    async def clear(self) -> None:
        await self.delete_prefix("")

    async def exists(self, key: str) -> bool:
        client = await self._ensure_client()
        try:
            return bool(await client.exists(self._key(key)))
        except RedisError as e:
            raise CacheBackendError(f"exists '{key}' failed: {e}") from e

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
