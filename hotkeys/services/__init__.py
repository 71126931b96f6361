from hotkeys.services.search_service import SearchService, get_search_service
from hotkeys.services.shortcut_repository import (
    InMemoryShortcutRepository,
    ShortcutRepository,
    get_shortcut_repository,
    shortcut_repository,
)

__all__ = [
    "InMemoryShortcutRepository",
    "SearchService",
    "ShortcutRepository",
    "get_search_service",
    "get_shortcut_repository",
    "shortcut_repository",
]
