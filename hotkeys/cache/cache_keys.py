from typing import Optional


class CacheKeys:
    """Key namespace shared by every search call."""

    SEARCH_RESULTS = "search_results"
    SHORTCUTS_BY_SOURCE = "shortcuts_by_source"
    ALL_SHORTCUTS = "all_shortcuts"
    USAGE_STATISTICS = "usage_statistics"
    ABBREVIATION_CACHE = "abbreviation_cache"

    @staticmethod
    def search_key(term: str, app_filter: Optional[str] = None) -> str:
        key = f"{CacheKeys.SEARCH_RESULTS}:{term.lower()}"
        if app_filter and app_filter.strip():
            key += f":{app_filter.lower()}"
        return key

    @staticmethod
    def usage_key(record_key: str) -> str:
        return f"{CacheKeys.USAGE_STATISTICS}:{record_key}"

    @staticmethod
    def abbreviation_key(term: str) -> str:
        return f"{CacheKeys.ABBREVIATION_CACHE}:{term.lower()}"
