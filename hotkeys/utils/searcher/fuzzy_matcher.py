"""
FuzzyMatcher: string similarity on a 0-100 scale.

The score is a weighted ratio over ``difflib.SequenceMatcher``:

    Variant          Weight   When
    ───────────────  ──────   ─────────────────────────────────────────
    plain ratio      1.00     always
    token-sorted     0.95     always (word order does not matter)
    best window      0.90     one string is >= 1.5x longer than the other
                     0.60     ... and >= 8x longer

The best variant wins and a string compared with itself always scores 100.
The plain ratio grows with shared content, but a window match is capped at
90, so a short prefix can outscore a longer one:
"c" and "co" score 90.0 against "copy" while "cop" scores 85.71.
"""

from __future__ import annotations

import logging
from difflib import SequenceMatcher
from typing import Iterable, List, Optional, Tuple

from hotkeys.models import MatchResult, MatchType, ShortcutRecord

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 60.0


def _ratio(a: str, b: str) -> float:
    return SequenceMatcher(None, a, b, autojunk=False).ratio()


def _token_sort(text: str) -> str:
    return " ".join(sorted(text.split()))


def _partial_ratio(shorter: str, longer: str) -> float:
    """Best ratio of ``shorter`` against same-length windows of ``longer``."""
    best = 0.0
    blocks = SequenceMatcher(None, shorter, longer, autojunk=False).get_matching_blocks()
    for block in blocks:
        start = max(block.b - block.a, 0)
        window = longer[start:start + len(shorter)]
        best = max(best, _ratio(shorter, window))
        if best > 0.995:
            break
    return best


def _weighted_ratio(a: str, b: str) -> float:
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    scores = [_ratio(a, b), _ratio(_token_sort(a), _token_sort(b)) * 0.95]

    length_ratio = len(longer) / len(shorter)
    if length_ratio >= 1.5:
        scale = 0.6 if length_ratio >= 8 else 0.9
        scores.append(_partial_ratio(shorter, longer) * scale)

    return max(scores)


def similarity(a: Optional[str], b: Optional[str]) -> float:
    """Similarity of two strings in [0, 100]. Never raises."""
    if not a or not b or not a.strip() or not b.strip():
        return 0.0
    try:
        return round(_weighted_ratio(a.strip().casefold(), b.strip().casefold()) * 100.0, 2)
    except Exception as e:
        logger.error(f"❌ [FuzzyMatcher] similarity failed for {a!r} / {b!r}: {e}")
        return 0.0


def is_match(a: Optional[str], b: Optional[str], threshold: float = DEFAULT_THRESHOLD) -> bool:
    return similarity(a, b) >= threshold


class FuzzyMatcher:
    """Batch fuzzy matching over shortcut records."""

    def similarity(self, query: str, target: str) -> float:
        return similarity(query, target)

    def is_match(self, query: str, target: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
        return is_match(query, target, threshold)

    def find_fuzzy_matches(
        self,
        query: str,
        records: Iterable[ShortcutRecord],
        threshold: float = DEFAULT_THRESHOLD,
    ) -> List[MatchResult]:
        """One result per record whose best field scores at least ``threshold``."""
        results: List[MatchResult] = []

        for record in records:
            best = self._best_field(query, record)
            if best is None:
                continue
            field, term, score = best
            if score >= threshold:
                results.append(MatchResult(
                    record=record,
                    score=score,
                    match_type=MatchType.FUZZY,
                    matched_field=field,
                    matched_terms=[term],
                ))

        # sorted() is stable: equal scores keep record order
        return sorted(results, key=lambda r: r.score, reverse=True)

    def _best_field(self, query: str, record: ShortcutRecord) -> Optional[Tuple[str, str, float]]:
        candidates = [("shortcut", record.shortcut), ("description", record.description)]
        candidates += [("keywords", k) for k in record.keywords]
        candidates += [("aliases", a) for a in record.aliases]

        best: Optional[Tuple[str, str, float]] = None
        for field, term in candidates:
            score = self.similarity(query, term)
            if score > (best[2] if best else 0.0):
                best = (field, term, score)
        return best
