from hotkeys.utils.searcher.abbreviation_matcher import AbbreviationMatcher, generate_abbreviation
from hotkeys.utils.searcher.fuzzy_matcher import FuzzyMatcher, is_match, similarity
from hotkeys.utils.searcher.score_calculator import ScoreCalculator

__all__ = [
    "AbbreviationMatcher",
    "FuzzyMatcher",
    "ScoreCalculator",
    "generate_abbreviation",
    "is_match",
    "similarity",
]
