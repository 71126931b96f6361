"""
ScoreCalculator: one relevance formula for every match strategy.

    final = base      * 0.40     (by match type)
          + relevance * 0.30     (field-by-field agreement with the term)
          + usage     * 0.10
          + recency   * 0.10
          + popularity* 0.05
          + context   * 0.05

clamped to [0, 100].
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Optional

from hotkeys.models import MatchType, SearchQuery, ShortcutRecord
from hotkeys.utils.searcher.lookup_tables import POPULAR_APPS

logger = logging.getLogger(__name__)

BASE_SCORES: Mapping[MatchType, float] = {
    MatchType.EXACT: 100.0,
    MatchType.FUZZY: 80.0,
    MatchType.ABBREVIATION: 75.0,
    MatchType.PARTIAL: 70.0,
    MatchType.KEYWORD: 65.0,
    MatchType.CATEGORY: 60.0,
}
DEFAULT_BASE_SCORE = 50.0

WEIGHT_BASE = 0.4
WEIGHT_RELEVANCE = 0.3
WEIGHT_USAGE = 0.1
WEIGHT_RECENCY = 0.1
WEIGHT_POPULARITY = 0.05
WEIGHT_CONTEXT = 0.05

MAX_USAGE_BOOST = 20.0


def _lower(value: Optional[str]) -> str:
    return value.lower() if value else ""


class ScoreCalculator:

    def __init__(self, popular_apps: Mapping[str, int] = POPULAR_APPS):
        self._popular_apps = {k.lower(): v for k, v in popular_apps.items()}

    def calculate_score(self, record: ShortcutRecord, query: SearchQuery, match_type: MatchType) -> float:
        options = query.options

        base = self.get_base_score(match_type)
        relevance = self.calculate_relevance_score(record, query.term, query.app_filter)
        usage = self.calculate_usage_boost(record) if options.boost_recently_used else 0.0
        recency = self.calculate_recency_boost(record) if options.boost_recently_used else 0.0
        popularity = self.calculate_popularity_boost(record) if options.boost_popular_apps else 0.0
        context = self.calculate_context_boost(record)

        final = (
            base * WEIGHT_BASE
            + relevance * WEIGHT_RELEVANCE
            + usage * WEIGHT_USAGE
            + recency * WEIGHT_RECENCY
            + popularity * WEIGHT_POPULARITY
            + context * WEIGHT_CONTEXT
        )
        return min(100.0, max(0.0, final))

    @staticmethod
    def get_base_score(match_type: MatchType) -> float:
        return BASE_SCORES.get(match_type, DEFAULT_BASE_SCORE)

    @staticmethod
    def calculate_relevance_score(record: ShortcutRecord, term: str, app_filter: Optional[str] = None) -> float:
        """Additive per-field relevance, one tier per field, capped at 100."""
        if not term or not term.strip():
            return 0.0

        q = term.lower()
        score = 0.0

        if app_filter and app_filter.strip():
            app = app_filter.lower()
            source = _lower(record.source)
            if source == app:
                score += 30.0
            elif app in source:
                score += 15.0

        shortcut = _lower(record.shortcut)
        if shortcut == q:
            score += 50.0
        elif q in shortcut:
            score += 30.0

        description = _lower(record.description)
        if description == q:
            score += 45.0
        elif description.startswith(q):
            score += 35.0
        elif q in description:
            score += 20.0

        keywords = [k.lower() for k in record.keywords]
        if q in keywords:
            score += 40.0
        elif any(q in k for k in keywords):
            score += 25.0

        aliases = [a.lower() for a in record.aliases]
        if q in aliases:
            score += 35.0
        elif any(q in a for a in aliases):
            score += 20.0

        if q in _lower(record.category):
            score += 10.0

        return min(100.0, score)

    @staticmethod
    def calculate_usage_boost(record: ShortcutRecord) -> float:
        if record.usage_count <= 0:
            return 0.0
        return min(MAX_USAGE_BOOST, math.log10(record.usage_count + 1) * 10.0)

    @staticmethod
    def calculate_recency_boost(record: ShortcutRecord) -> float:
        # TODO: add a last_used timestamp to ShortcutRecord and decay it here
        return 0.0

    def calculate_popularity_boost(self, record: ShortcutRecord) -> float:
        return self._popular_apps.get(_lower(record.source), 0) / 10.0

    @staticmethod
    def calculate_context_boost(record: ShortcutRecord) -> float:
        boost = 0.0
        if record.is_global:
            boost += 5.0
        if record.difficulty == "Beginner":
            boost += 2.0
        if record.platform == "Windows":
            boost += 3.0
        return boost
