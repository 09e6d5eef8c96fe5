import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_scanner.features import competition_level, detect_industry, detect_market_context  # noqa: E402


class IndustryDetectionTests(unittest.TestCase):
    def test_technology_text(self):
        industry, confidence = detect_industry("Software engineer writing code for web and mobile products.")
        self.assertEqual(industry, "Technology")
        self.assertEqual(confidence, 1.0)

    def test_marketing_text(self):
        industry, confidence = detect_industry("Marketing campaign work on brand, SEO and social media content.")
        self.assertEqual(industry, "Marketing")
        self.assertEqual(confidence, 1.0)

    def test_tie_resolves_in_table_order(self):
        industry, confidence = detect_industry("sales and marketing")
        self.assertEqual(industry, "Marketing")
        self.assertEqual(confidence, 0.5)

    def test_whole_words_only(self):
        industry, _ = detect_industry("taxonomy of appetizers")
        self.assertEqual(industry, "Technology")

    def test_no_hits_uses_default(self):
        self.assertEqual(detect_industry(""), ("Technology", 0.35))


class MarketContextTests(unittest.TestCase):
    def test_empty_inputs(self):
        market = detect_market_context("", "")
        self.assertEqual(market.industry, "Technology")
        self.assertEqual(market.confidence, 0.35)
        self.assertEqual(market.competition_level, 72)
        self.assertIn("React", market.trending_skills)
        self.assertEqual(market.source, "heuristic")

    def test_marketing_context(self):
        market = detect_market_context(
            "Ran paid advertising campaigns and SEO for the brand.",
            "Digital marketing manager",
        )
        self.assertEqual(market.industry, "Marketing")
        self.assertEqual(market.competition_level, 68)
        self.assertIn("GA4", market.trending_skills)
        self.assertIn("Universal Analytics", market.declining_skills)
        self.assertIn("B2B", market.secondary)

    def test_competition_level_default(self):
        self.assertEqual(competition_level("Consulting"), 75)
        self.assertEqual(competition_level("Space Mining"), 65)


if __name__ == "__main__":
    unittest.main()
