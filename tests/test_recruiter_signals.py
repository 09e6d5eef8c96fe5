import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_scanner.features.recruiter_signals import (  # noqa: E402
    authority_language,
    authority_score,
    has_title_line,
    score_recruiter_signals,
)

STRONG_RESUME = """Jane Doe
Senior Product Manager
jane@example.com | (555) 123-4567
Summary
Led cross-functional teams shipping analytics products.

Experience
- Led launch that increased revenue by 25%
- Managed $2M budget across regions
- Designed 10+ pricing experiments

Education
BS Economics 2015
"""

WEAK_RESUME = "helped with tasks\nassisted the team\nworked on things"


class RecruiterSignalTests(unittest.TestCase):
    def test_strong_resume(self):
        profile = score_recruiter_signals(STRONG_RESUME)
        self.assertEqual(profile.first6s_score, 100)
        self.assertEqual(profile.authority_score, 75)
        self.assertEqual(profile.narrative_score, 100)
        self.assertEqual(profile.red_flags, [])
        self.assertEqual(profile.strong_verbs, ["led", "managed", "increased", "designed"])
        self.assertEqual(profile.source, "heuristic")

    def test_weak_resume_flags_in_fixed_order(self):
        profile = score_recruiter_signals(WEAK_RESUME)
        self.assertEqual(profile.first6s_score, 0)
        self.assertEqual(profile.authority_score, 0)
        self.assertEqual(profile.narrative_score, 0)
        self.assertEqual(
            profile.red_flags,
            [
                "Missing email address",
                "Missing phone number",
                "Too many weak action verbs",
                "Insufficient quantification",
                "Missing professional summary",
            ],
        )
        self.assertEqual(profile.weak_verbs, ["helped", "assisted", "worked on"])

    def test_scores_use_documented_steps(self):
        samples = [STRONG_RESUME, WEAK_RESUME, "", "Summary only", "- one bullet\n\n2020\n\nmore"]
        for text in samples:
            profile = score_recruiter_signals(text)
            self.assertIn(profile.first6s_score, {0, 25, 50, 75, 100})
            self.assertIn(profile.narrative_score, {0, 30, 40, 60, 70, 100})
            self.assertGreaterEqual(profile.authority_score, 0)
            self.assertLessEqual(profile.authority_score, 100)
            self.assertLessEqual(len(profile.recruiter_tips), 7)

    def test_authority_is_clamped(self):
        self.assertEqual(authority_score(["led"] * 10, [], 10), 100)
        self.assertEqual(authority_score([], ["helped", "assisted"], 0), 0)

    def test_verbs_are_whole_words(self):
        strong, weak = authority_language("Ledger reconciliation, unhelpful meetings")
        self.assertEqual(strong, [])
        self.assertEqual(weak, [])

    def test_title_line_detection(self):
        self.assertTrue(has_title_line("Jane Doe\nData Analyst\n"))
        self.assertFalse(has_title_line("I worked as an analyst for many years at a large company in 2019"))


if __name__ == "__main__":
    unittest.main()
