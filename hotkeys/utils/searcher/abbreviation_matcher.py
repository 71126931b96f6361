"""
AbbreviationMatcher: resolves short queries such as "cp", "vsc" or "nt".

Match order (first success wins):
    1. Dictionary   known abbreviation -> text must contain its expansion
    2. Initials     abbr[i] == first letter of word i
    3. Subsequence  abbr characters appear in order anywhere in the text
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Mapping, Optional

from hotkeys.models import MatchResult, MatchType, ShortcutRecord
from hotkeys.utils.searcher.lookup_tables import COMMON_ABBREVIATIONS

logger = logging.getLogger(__name__)

_WORD_SPLIT = re.compile(r"[\s\-_+]+")

BASE_SCORE = 70.0
WORD_COUNT_BONUS = 20.0
DICTIONARY_BONUS = 15.0


def split_words(text: str) -> List[str]:
    return [w for w in _WORD_SPLIT.split(text) if w]


def generate_abbreviation(text: Optional[str]) -> str:
    """Initials of a multi-word text, or the first three letters of one word."""
    if not text or not text.strip():
        return ""
    words = split_words(text.strip())
    if len(words) == 1:
        return words[0][:3].lower()
    return "".join(w[0] for w in words).lower()


class AbbreviationMatcher:

    def __init__(self, abbreviations: Mapping[str, str] = COMMON_ABBREVIATIONS):
        self._abbreviations = {k.lower(): v.lower() for k, v in abbreviations.items()}

    def is_known_abbreviation(self, abbreviation: str) -> bool:
        return abbreviation.strip().lower() in self._abbreviations

    def expand(self, abbreviation: str) -> Optional[str]:
        return self._abbreviations.get(abbreviation.strip().lower())

    def is_abbreviation_match(self, abbreviation: Optional[str], text: Optional[str]) -> bool:
        if not abbreviation or not text or not abbreviation.strip() or not text.strip():
            return False

        abbr = abbreviation.strip().lower()
        full = text.strip().lower()

        expansion = self._abbreviations.get(abbr)
        if expansion is not None:
            return expansion in full

        words = split_words(full)
        if not words:
            return False

        if self._is_first_letter_match(abbr, words):
            return True

        return self._is_subsequence_match(abbr, full)

    @staticmethod
    def _is_first_letter_match(abbr: str, words: List[str]) -> bool:
        if len(abbr) > len(words):
            return False
        return all(words[i][0] == ch for i, ch in enumerate(abbr))

    @staticmethod
    def _is_subsequence_match(abbr: str, text: str) -> bool:
        remaining = iter(text)
        return all(ch in remaining for ch in abbr)

    def find_abbreviation_matches(
        self,
        query: str,
        records: Iterable[ShortcutRecord],
    ) -> List[MatchResult]:
        results: List[MatchResult] = []

        for record in records:
            fields: List[str] = []
            terms: List[str] = []

            candidates = [("shortcut", record.shortcut), ("description", record.description)]
            candidates += [("keywords", k) for k in record.keywords]
            candidates += [("aliases", a) for a in record.aliases]
            candidates.append(("source", record.source))

            for field, term in candidates:
                if self.is_abbreviation_match(query, term):
                    if field not in fields:
                        fields.append(field)
                    terms.append(term)

            if terms:
                results.append(MatchResult(
                    record=record,
                    score=self.calculate_abbreviation_score(query, terms),
                    match_type=MatchType.ABBREVIATION,
                    matched_field=", ".join(fields),
                    matched_terms=terms,
                ))

        return sorted(results, key=lambda r: r.score, reverse=True)

    def calculate_abbreviation_score(self, query: str, matched_terms: List[str]) -> float:
        if not matched_terms:
            return 0.0

        score = BASE_SCORE
        # the first matched term stands in for the best one
        if len(query) == len(split_words(matched_terms[0])):
            score += WORD_COUNT_BONUS
        if self.is_known_abbreviation(query):
            score += DICTIONARY_BONUS

        return min(100.0, score)
