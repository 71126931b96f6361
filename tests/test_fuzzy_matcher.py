import unittest
from unittest.mock import patch

from hotkeys.models import MatchType
from hotkeys.utils.searcher import FuzzyMatcher, is_match, similarity

from _records import make_record


class TestSimilarity(unittest.TestCase):

    def test_window_match_is_capped_for_short_prefixes(self):
        """A one or two letter prefix is a window hit at 90; "cop" falls back to the plain ratio."""
        scores = [similarity("copy", prefix) for prefix in ("c", "co", "cop", "copy")]
        self.assertEqual(scores, [90.0, 90.0, 85.71, 100.0])

    def test_empty_or_blank_input_scores_zero(self):
        """Either side empty or whitespace gives 0."""
        for other in ["copy", "Ctrl+C", "x"]:
            self.assertEqual(similarity("", other), 0.0)
            self.assertEqual(similarity(other, ""), 0.0)
            self.assertEqual(similarity("   ", other), 0.0)
        self.assertEqual(similarity(None, "copy"), 0.0)

    def test_self_similarity_is_maximal(self):
        """A string is at least as similar to itself as to anything else."""
        words = ["copy", "paste", "Command Palette", "ctrl+shift+t", "a"]
        for a in words:
            self.assertEqual(similarity(a, a), 100.0)
            for b in words:
                self.assertGreaterEqual(similarity(a, a), similarity(a, b))

    def test_case_insensitive(self):
        self.assertEqual(similarity("COPY", "copy"), 100.0)

    def test_more_shared_content_scores_higher(self):
        self.assertGreater(similarity("copy", "copy paste"), similarity("copy", "cup"))
        self.assertGreater(similarity("paste", "pastes"), similarity("paste", "post"))

    def test_word_order_barely_matters(self):
        self.assertGreaterEqual(similarity("tab new", "new tab"), 95.0)

    def test_scores_stay_in_range(self):
        pairs = [("a", "b"), ("copy", "a much longer description about copying"), ("x", "x" * 50)]
        for a, b in pairs:
            score = similarity(a, b)
            self.assertGreaterEqual(score, 0.0)
            self.assertLessEqual(score, 100.0)

    def test_internal_failure_returns_zero(self):
        """Errors inside the scorer never escape."""
        with patch("hotkeys.utils.searcher.fuzzy_matcher._weighted_ratio", side_effect=ValueError("boom")):
            self.assertEqual(similarity("copy", "copy"), 0.0)

    def test_is_match_uses_threshold(self):
        self.assertTrue(is_match("copy", "copy"))
        self.assertTrue(is_match("coppy", "copy", threshold=80))
        self.assertFalse(is_match("coppy", "copy", threshold=95))


class TestFindFuzzyMatches(unittest.TestCase):

    def setUp(self):
        self.matcher = FuzzyMatcher()

    def test_reports_best_field_only(self):
        record = make_record("Ctrl+Shift+P", "Command Palette", "vscode", keywords=["commands"])
        results = self.matcher.find_fuzzy_matches("command", [record])

        self.assertEqual(len(results), 1)
        result = results[0]
        self.assertEqual(result.match_type, MatchType.FUZZY)
        self.assertEqual(result.matched_field, "keywords")
        self.assertEqual(result.matched_terms, ["commands"])
        self.assertEqual(result.score, similarity("command", "commands"))

    def test_threshold_filters_records(self):
        record = make_record("Ctrl+C", "Copy")
        self.assertEqual(len(self.matcher.find_fuzzy_matches("coppy", [record], threshold=60)), 1)
        self.assertEqual(self.matcher.find_fuzzy_matches("coppy", [record], threshold=95), [])

    def test_sorted_descending_and_stable_on_ties(self):
        first = make_record("Ctrl+C", "Copy", "windows")
        second = make_record("Ctrl+C", "Copy", "explorer")
        weaker = make_record("Ctrl+Shift+C", "Copy path", "explorer")

        results = self.matcher.find_fuzzy_matches("copy", [weaker, first, second])

        self.assertEqual([r.record for r in results], [first, second, weaker])

    def test_aliases_are_compared(self):
        record = make_record("Ctrl+T", "New Tab", "chrome", aliases=["open tab"])
        results = self.matcher.find_fuzzy_matches("open tab", [record])
        self.assertEqual(results[0].matched_field, "aliases")
        self.assertEqual(results[0].score, 100.0)


if __name__ == "__main__":
    unittest.main()
