"""
SearchService: ranked shortcut search.

Pipeline for one call (see ``search``):

    blank term ─────────────────────────────────────────────► []
    acquire slot (max 3 concurrent, FIFO)
      cached results? ──────────────────────────────────────► copies, from_cache=True
      load candidates through the data tier (30 min)
      exact │ partial │ fuzzy │ abbreviation   (worker threads, concurrently)
      re-score every finding with ScoreCalculator
      dedup by (source, shortcut, description), keep higher score
      stable sort, truncate, cache (5 min)
    release slot

Any exception inside the slot discards the whole search and returns [].
A failing pass is never isolated: a ranking always comes from one formula.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from functools import lru_cache
from typing import Dict, List, Optional, Set, Tuple

from hotkeys.cache import CacheKeys, ResultCache, create_cache_backend
from hotkeys.config import Settings, settings as app_settings
from hotkeys.models import MatchResult, MatchType, SearchOptions, SearchQuery, ShortcutRecord
from hotkeys.services.shortcut_repository import ShortcutRepository, get_shortcut_repository
from hotkeys.utils.async_utils import run_in_executor
from hotkeys.utils.searcher import AbbreviationMatcher, FuzzyMatcher, ScoreCalculator, generate_abbreviation

logger = logging.getLogger(__name__)

DedupKey = Tuple[str, str, str]

SEARCH_CACHE_TTL = 5 * 60
DATA_CACHE_TTL = 30 * 60
USAGE_CACHE_TTL = 24 * 60 * 60


class SearchService:

    def __init__(
        self,
        repository: ShortcutRepository,
        cache: ResultCache,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        abbreviation_matcher: Optional[AbbreviationMatcher] = None,
        score_calculator: Optional[ScoreCalculator] = None,
        max_concurrent_searches: int = 3,
        search_cache_ttl: float = SEARCH_CACHE_TTL,
        data_cache_ttl: float = DATA_CACHE_TTL,
        usage_cache_ttl: float = USAGE_CACHE_TTL,
        default_options: Optional[SearchOptions] = None,
    ):
        self.repository = repository
        self.cache = cache
        self.fuzzy_matcher = fuzzy_matcher or FuzzyMatcher()
        self.abbreviation_matcher = abbreviation_matcher or AbbreviationMatcher()
        self.score_calculator = score_calculator or ScoreCalculator()
        self.max_concurrent_searches = max_concurrent_searches
        self.search_cache_ttl = search_cache_ttl
        self.data_cache_ttl = data_cache_ttl
        self.usage_cache_ttl = usage_cache_ttl
        self.default_options = default_options or SearchOptions()

        self._semaphore = asyncio.Semaphore(max_concurrent_searches)
        self._usage_lock = threading.Lock()
        self._background_tasks: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, settings: Settings, repository: ShortcutRepository) -> "SearchService":
        return cls(
            repository=repository,
            cache=ResultCache(create_cache_backend(settings)),
            max_concurrent_searches=settings.max_concurrent_searches,
            search_cache_ttl=settings.search_cache_ttl,
            data_cache_ttl=settings.data_cache_ttl,
            usage_cache_ttl=settings.usage_cache_ttl,
            default_options=SearchOptions(
                enable_fuzzy_search=settings.enable_fuzzy_search,
                enable_abbreviation_search=settings.enable_abbreviation_search,
                use_cache=settings.use_cache,
                max_results=settings.max_results,
                fuzzy_threshold=settings.fuzzy_threshold,
                boost_recently_used=settings.boost_recently_used,
                boost_popular_apps=settings.boost_popular_apps,
            ),
        )

    # ─────────────────────────────────────────────────────────────────────────
    #  Public API
    # ─────────────────────────────────────────────────────────────────────────
    async def search(
        self,
        term: Optional[str],
        app_filter: Optional[str] = None,
        options: Optional[SearchOptions] = None,
    ) -> List[MatchResult]:
        """Ranked matches for ``term``. Never raises except on cancellation."""
        if not term or not term.strip():
            return []

        app_filter = app_filter.strip() if app_filter and app_filter.strip() else None
        query = SearchQuery(
            term=term.strip(),
            app_filter=app_filter,
            options=options or self.default_options,
        )

        async with self._semaphore:
            try:
                return await self._search(query)
            except Exception as e:
                logger.error(f"❌ [SearchService] search failed for '{query.term}': {e}", exc_info=True)
                return []

    def update_usage_statistics(self, record: ShortcutRecord) -> None:
        """Count one use of ``record`` and persist it in the background."""
        with self._usage_lock:
            record.usage_count += 1
            count = record.usage_count

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"⚠️ [SearchService] no running loop, usage of '{record.usage_key}' not persisted")
            return

        task = loop.create_task(self._persist_usage(record.usage_key, count))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def wait_for_background_tasks(self) -> None:
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    async def invalidate_cache(self) -> None:
        await self.cache.clear()
        logger.info("🗑️ [SearchService] cache invalidated")

    async def warmup_cache(self) -> None:
        try:
            logger.info("🔄 [SearchService] cache warmup started")
            await self._load_all_records()
            await self._load_records_by_source()
            logger.info("✅ [SearchService] cache warmup complete")
        except Exception as e:
            logger.error(f"❌ [SearchService] cache warmup failed: {e}")

    async def list_sources(self) -> List[Tuple[str, int]]:
        """Every source with its record count, alphabetically."""
        by_source = await self._load_records_by_source()
        return sorted((source, len(records)) for source, records in by_source.items())

    async def get_source_records(self, app: str) -> List[ShortcutRecord]:
        """All records of sources whose name contains ``app``."""
        if not app or not app.strip():
            return []
        needle = app.strip().lower()
        by_source = await self._load_records_by_source()

        records: List[ShortcutRecord] = []
        for source in sorted(by_source):
            if needle in source.lower():
                records += sorted(by_source[source], key=lambda r: (r.category or "", r.description))
        return records

    async def get_abbreviation(self, text: str) -> str:
        if not text or not text.strip():
            return ""

        async def _generate() -> str:
            return generate_abbreviation(text)

        return await self.cache.get_or_set(
            CacheKeys.abbreviation_key(text.strip()), _generate, self.data_cache_ttl, as_type=str
        )

    async def close(self) -> None:
        await self.wait_for_background_tasks()
        await self.cache.close()

    # ─────────────────────────────────────────────────────────────────────────
    #  Search pipeline
    # ─────────────────────────────────────────────────────────────────────────
    async def _search(self, query: SearchQuery) -> List[MatchResult]:
        options = query.options
        cache_key = CacheKeys.search_key(query.term, query.app_filter)

        if options.use_cache:
            cached = await self.cache.get(cache_key, as_type=List[MatchResult])
            if cached:
                logger.debug(f"⚡ [SearchService] cache HIT for '{query.term}'")
                return [r.model_copy(update={"from_cache": True}) for r in cached[:options.max_results]]

        logger.debug(f"🔍 [SearchService] searching '{query.term}' (filter={query.app_filter})")

        records = await self._get_candidates(query.app_filter)
        if not records:
            return []

        passes = [
            run_in_executor(self._find_exact_matches, records, query),
            run_in_executor(self._find_partial_matches, records, query),
        ]
        if options.enable_fuzzy_search:
            passes.append(run_in_executor(self._find_fuzzy_matches, records, query))
        if options.enable_abbreviation_search:
            passes.append(run_in_executor(self._find_abbreviation_matches, records, query))

        found = await asyncio.gather(*passes)
        merged = [result for batch in found for result in batch]

        unique = self._remove_duplicates(merged)
        ranked = sorted(unique, key=lambda r: r.score, reverse=True)[:options.max_results]

        if options.use_cache and ranked:
            await self.cache.set(cache_key, list(ranked), self.search_cache_ttl)

        logger.debug(f"💾 [SearchService] {len(ranked)} results for '{query.term}'")
        return ranked

    async def _get_candidates(self, app_filter: Optional[str]) -> List[ShortcutRecord]:
        if not app_filter:
            return await self._load_all_records()

        needle = app_filter.lower()
        by_source = await self._load_records_by_source()
        return [
            record
            for source, records in by_source.items()
            if needle in source.lower()
            for record in records
        ]

    async def _load_all_records(self) -> List[ShortcutRecord]:
        return await self.cache.get_or_set(
            CacheKeys.ALL_SHORTCUTS,
            self.repository.get_all_records,
            self.data_cache_ttl,
            as_type=List[ShortcutRecord],
        )

    async def _load_records_by_source(self) -> Dict[str, List[ShortcutRecord]]:
        return await self.cache.get_or_set(
            CacheKeys.SHORTCUTS_BY_SOURCE,
            self.repository.get_records_by_source,
            self.data_cache_ttl,
            as_type=Dict[str, List[ShortcutRecord]],
        )

    # ─────────────────────────────────────────────────────────────────────────
    #  Matching passes (run on worker threads, read-only over ``records``)
    # ─────────────────────────────────────────────────────────────────────────
    def _find_exact_matches(self, records: List[ShortcutRecord], query: SearchQuery) -> List[MatchResult]:
        q = query.term.lower()
        results: List[MatchResult] = []

        for record in records:
            fields = []
            if record.shortcut.lower() == q:
                fields.append("shortcut")
            if record.description.lower() == q:
                fields.append("description")
            if any(k.lower() == q for k in record.keywords):
                fields.append("keywords")
            if any(a.lower() == q for a in record.aliases):
                fields.append("aliases")

            if fields:
                results.append(MatchResult(
                    record=record,
                    score=self.score_calculator.calculate_score(record, query, MatchType.EXACT),
                    match_type=MatchType.EXACT,
                    matched_field=", ".join(fields),
                    matched_terms=[query.term],
                ))

        return results

    def _find_partial_matches(self, records: List[ShortcutRecord], query: SearchQuery) -> List[MatchResult]:
        q = query.term.lower()
        results: List[MatchResult] = []

        for record in records:
            fields: List[str] = []
            terms: List[str] = []

            if q in record.shortcut.lower():
                fields.append("shortcut")
                terms.append(record.shortcut)
            if q in record.description.lower():
                fields.append("description")
                terms.append(record.description)

            keywords = [k for k in record.keywords if q in k.lower()]
            if keywords:
                fields.append("keywords")
                terms += keywords

            aliases = [a for a in record.aliases if q in a.lower()]
            if aliases:
                fields.append("aliases")
                terms += aliases

            if record.category and q in record.category.lower():
                fields.append("category")
                terms.append(record.category)

            if fields:
                results.append(MatchResult(
                    record=record,
                    score=self.score_calculator.calculate_score(record, query, MatchType.PARTIAL),
                    match_type=MatchType.PARTIAL,
                    matched_field=", ".join(fields),
                    matched_terms=list(dict.fromkeys(terms)),
                ))

        return results

    def _find_fuzzy_matches(self, records: List[ShortcutRecord], query: SearchQuery) -> List[MatchResult]:
        found = self.fuzzy_matcher.find_fuzzy_matches(query.term, records, query.options.fuzzy_threshold)
        return self._rescore(found, query, MatchType.FUZZY)

    def _find_abbreviation_matches(self, records: List[ShortcutRecord], query: SearchQuery) -> List[MatchResult]:
        found = self.abbreviation_matcher.find_abbreviation_matches(query.term, records)
        return self._rescore(found, query, MatchType.ABBREVIATION)

    def _rescore(self, results: List[MatchResult], query: SearchQuery, match_type: MatchType) -> List[MatchResult]:
        return [
            r.model_copy(update={"score": self.score_calculator.calculate_score(r.record, query, match_type)})
            for r in results
        ]

    @staticmethod
    def _remove_duplicates(results: List[MatchResult]) -> List[MatchResult]:
        """One result per dedup key, at the key's first position, higher score wins."""
        positions: Dict[DedupKey, int] = {}
        unique: List[MatchResult] = []

        for result in results:
            key = result.record.dedup_key
            index = positions.get(key)
            if index is None:
                positions[key] = len(unique)
                unique.append(result)
            elif result.score > unique[index].score:
                unique[index] = result

        return unique

    # ─────────────────────────────────────────────────────────────────────────
    #  Background work
    # ─────────────────────────────────────────────────────────────────────────
    async def _persist_usage(self, usage_key: str, count: int) -> None:
        try:
            await self.cache.set(CacheKeys.usage_key(usage_key), count, self.usage_cache_ttl)
            removed = await self.cache.remove_prefix(f"{CacheKeys.SEARCH_RESULTS}:")
            logger.debug(f"📈 [SearchService] usage of '{usage_key}' = {count}, dropped {removed} cached searches")
        except Exception as e:
            logger.warning(f"⚠️ [SearchService] usage update for '{usage_key}' dropped: {e}")


@lru_cache(maxsize=1)
def get_search_service() -> SearchService:
    return SearchService.from_settings(app_settings, get_shortcut_repository())
