import logging
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class CacheBackendError(Exception):
    """Raised by a cache backend when the underlying store fails."""


class CacheBackend(Protocol):
    """Storage capability behind ``ResultCache``.

    Implementations hold values with an absolute expiry and treat expired
    entries as absent on read. ``get`` returns ``None`` for a miss.
    """

    name: str

    async def get(self, key: str, as_type: Optional[Any] = None) -> Optional[Any]: ...

    async def set(self, key: str, value: Any, ttl: float) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def delete_prefix(self, prefix: str) -> int: ...

    async def clear(self) -> None: ...

    async def exists(self, key: str) -> bool: ...

    async def close(self) -> None: ...
