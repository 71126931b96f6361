import math
import unittest

from hotkeys.models import MatchType, SearchOptions, SearchQuery
from hotkeys.utils.searcher import ScoreCalculator

from _records import make_record


def query(term, app_filter=None, **options):
    return SearchQuery(term=term, app_filter=app_filter, options=SearchOptions(**options))


class TestBaseScore(unittest.TestCase):

    def test_base_score_per_match_type(self):
        expected = {
            MatchType.EXACT: 100.0,
            MatchType.FUZZY: 80.0,
            MatchType.ABBREVIATION: 75.0,
            MatchType.PARTIAL: 70.0,
            MatchType.KEYWORD: 65.0,
            MatchType.CATEGORY: 60.0,
        }
        for match_type, base in expected.items():
            self.assertEqual(ScoreCalculator.get_base_score(match_type), base)

    def test_unknown_match_type_falls_back(self):
        self.assertEqual(ScoreCalculator.get_base_score("semantic"), 50.0)


class TestRelevanceScore(unittest.TestCase):

    def relevance(self, record, term, app_filter=None):
        return ScoreCalculator.calculate_relevance_score(record, term, app_filter)

    def test_one_tier_per_field(self):
        """Exact shortcut match earns +50 only, never +50 and +30."""
        record = make_record("ctrl+c", "", "x")
        self.assertEqual(self.relevance(record, "Ctrl+C"), 50.0)

    def test_description_tiers(self):
        self.assertEqual(self.relevance(make_record("F1", "Copy", "x"), "copy"), 45.0)
        self.assertEqual(self.relevance(make_record("F1", "Copy selection", "x"), "copy"), 35.0)
        self.assertEqual(self.relevance(make_record("F1", "Quick copy", "x"), "copy"), 20.0)

    def test_keyword_alias_and_category(self):
        record = make_record("F1", "", "x", keywords=["clip", "clipboard"], aliases=["clipper"], category="Clipboard")
        # keyword exact 40 + alias substring 20 + category 10
        self.assertEqual(self.relevance(record, "clip"), 70.0)

    def test_app_filter(self):
        record = make_record("F1", "", "chrome")
        self.assertEqual(self.relevance(record, "zzz", "Chrome"), 30.0)
        self.assertEqual(self.relevance(record, "zzz", "chr"), 15.0)
        self.assertEqual(self.relevance(record, "zzz", "firefox"), 0.0)

    def test_capped_at_100(self):
        record = make_record("x", "x", "x", keywords=["x"], aliases=["x"], category="x")
        self.assertEqual(self.relevance(record, "x", "x"), 100.0)

    def test_blank_term(self):
        self.assertEqual(self.relevance(make_record(), "  "), 0.0)


class TestBoosts(unittest.TestCase):

    def setUp(self):
        self.calculator = ScoreCalculator()

    def test_usage_boost_is_logarithmic_and_capped(self):
        self.assertEqual(self.calculator.calculate_usage_boost(make_record(usage_count=0)), 0.0)
        self.assertAlmostEqual(self.calculator.calculate_usage_boost(make_record(usage_count=9)), 10.0)
        self.assertAlmostEqual(
            self.calculator.calculate_usage_boost(make_record(usage_count=3)), math.log10(4) * 10.0
        )
        self.assertEqual(self.calculator.calculate_usage_boost(make_record(usage_count=10 ** 6)), 20.0)

    def test_recency_boost_is_a_stub(self):
        self.assertEqual(self.calculator.calculate_recency_boost(make_record(usage_count=50)), 0.0)

    def test_popularity_boost(self):
        self.assertEqual(self.calculator.calculate_popularity_boost(make_record(source="windows")), 10.0)
        self.assertEqual(self.calculator.calculate_popularity_boost(make_record(source="Chrome")), 10.0)
        self.assertEqual(self.calculator.calculate_popularity_boost(make_record(source="obscure")), 0.0)

    def test_injected_popularity_table(self):
        calculator = ScoreCalculator({"Obscure": 40})
        self.assertEqual(calculator.calculate_popularity_boost(make_record(source="obscure")), 4.0)
        self.assertEqual(calculator.calculate_popularity_boost(make_record(source="windows")), 0.0)

    def test_context_boost(self):
        record = make_record(is_global=True, difficulty="Beginner", platform="Windows")
        self.assertEqual(self.calculator.calculate_context_boost(record), 10.0)
        self.assertEqual(self.calculator.calculate_context_boost(make_record(platform="macOS")), 0.0)


class TestCalculateScore(unittest.TestCase):

    def setUp(self):
        self.calculator = ScoreCalculator()

    def test_exact_description_match(self):
        """Ctrl+C / Copy / windows for "copy": 100*.4 + 45*.3 + 10*.05."""
        score = self.calculator.calculate_score(make_record(), query("copy"), MatchType.EXACT)
        self.assertAlmostEqual(score, 54.0, places=6)

    def test_boost_flags(self):
        record = make_record(usage_count=9)
        with_boosts = self.calculator.calculate_score(record, query("copy"), MatchType.EXACT)
        without = self.calculator.calculate_score(
            record, query("copy", boost_recently_used=False, boost_popular_apps=False), MatchType.EXACT
        )
        # usage 10*.1 + popularity 10*.05
        self.assertAlmostEqual(with_boosts - without, 1.5, places=6)

    def test_score_always_in_range(self):
        records = [
            make_record(),
            make_record("", "", ""),
            make_record("x", "x", "windows", keywords=["x"], aliases=["x"], category="x",
                        usage_count=10 ** 9, is_global=True, difficulty="Beginner", platform="Windows"),
        ]
        for record in records:
            for match_type in list(MatchType) + ["other"]:
                for term in ["x", "copy", "zzz"]:
                    score = self.calculator.calculate_score(record, query(term, "windows"), match_type)
                    self.assertGreaterEqual(score, 0.0)
                    self.assertLessEqual(score, 100.0)


if __name__ == "__main__":
    unittest.main()
