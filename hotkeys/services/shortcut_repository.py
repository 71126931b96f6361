import logging
import threading
from typing import Dict, Iterable, List, Protocol

from hotkeys.models import ShortcutRecord

logger = logging.getLogger(__name__)


class ShortcutRepository(Protocol):
    """Source of records consumed by the search engine."""

    async def get_all_records(self) -> List[ShortcutRecord]: ...

    async def get_records_by_source(self) -> Dict[str, List[ShortcutRecord]]: ...


class InMemoryShortcutRepository:
    """
    Holds the current record set in memory.

    Whoever ingests records (file loader, HTTP upload) calls ``replace_all``;
    the whole set is swapped at once, never patched.
    """

    def __init__(self, records: Iterable[ShortcutRecord] = ()):
        self._lock = threading.Lock()
        self._records: List[ShortcutRecord] = []
        self._by_source: Dict[str, List[ShortcutRecord]] = {}
        self.replace_all(records)

    def __len__(self) -> int:
        return len(self._records)

    def replace_all(self, records: Iterable[ShortcutRecord]) -> None:
        records = list(records)
        by_source: Dict[str, List[ShortcutRecord]] = {}
        for record in records:
            by_source.setdefault(record.source, []).append(record)

        with self._lock:
            self._records = records
            self._by_source = by_source

        logger.info(f"📚 [ShortcutRepository] loaded {len(records)} records from {len(by_source)} sources")

    async def get_all_records(self) -> List[ShortcutRecord]:
        with self._lock:
            return list(self._records)

    async def get_records_by_source(self) -> Dict[str, List[ShortcutRecord]]:
        with self._lock:
            return {source: list(records) for source, records in self._by_source.items()}

    def find(self, source: str, shortcut: str, description: str) -> ShortcutRecord:
        """Look up one record by its dedup key. Raises ``KeyError`` if absent."""
        key = (source, shortcut, description)
        with self._lock:
            for record in self._by_source.get(source, []):
                if record.dedup_key == key:
                    return record
        raise KeyError(key)


# Singleton repository instance
shortcut_repository = InMemoryShortcutRepository()


def get_shortcut_repository() -> InMemoryShortcutRepository:
    return shortcut_repository
