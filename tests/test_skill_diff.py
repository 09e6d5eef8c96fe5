import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_scanner.features.patterns import mentions  # noqa: E402
from ats_scanner.features.skill_diff import (  # noqa: E402
    diff_skills,
    emphasis_level,
    impact_weight,
    requirements_section,
)
from ats_scanner.scoring.aggregate import skill_match_score  # noqa: E402
from ats_scanner.taxonomy import LocalSkillVocabulary, get_default_vocabulary  # noqa: E402


def _vocabulary() -> LocalSkillVocabulary:
    return LocalSkillVocabulary(
        hard=["SQL", "Python", "AWS", "Java", "PostgreSQL", "Tableau"],
        soft=["Communication", "Leadership"],
        transferable=[("mysql", "PostgreSQL", 0.8), ("excel", "Google Sheets", 0.7)],
    )


class SkillDiffTests(unittest.TestCase):
    def test_sql_python_aws_scenario(self):
        job = "Requirements:\n- SQL\n- Python\n- AWS\n"
        partial = diff_skills("Built weekly reports in SQL.", job, _vocabulary())
        full = diff_skills("Built pipelines with SQL, Python and AWS.", job, _vocabulary())

        self.assertEqual(partial.hard_found, ["SQL"])
        self.assertEqual(set(partial.hard_missing), {"Python", "AWS"})
        self.assertEqual(set(full.hard_found), {"SQL", "Python", "AWS"})
        self.assertEqual(full.hard_missing, [])
        self.assertLess(skill_match_score(partial), skill_match_score(full))

    def test_found_and_missing_are_disjoint_and_grounded_in_job_text(self):
        job = "We need Python and SQL. Tableau is a plus. Strong communication required."
        resume = "Python developer. I communicate well. Communication and leadership."
        profile = diff_skills(resume, job, _vocabulary())

        self.assertFalse(set(profile.hard_found) & set(profile.hard_missing))
        for skill in profile.hard_found + profile.hard_missing:
            self.assertTrue(mentions(job, skill), msg=skill)
        for skill in profile.hard_found:
            self.assertTrue(mentions(resume, skill), msg=skill)
        for skill in profile.hard_missing:
            self.assertFalse(mentions(resume, skill), msg=skill)
        self.assertEqual(profile.soft_found, ["Communication"])
        self.assertEqual(profile.soft_missing, [])

    def test_terms_match_whole_words_only(self):
        profile = diff_skills("JavaScript engineer", "Senior JavaScript engineer", _vocabulary())
        self.assertNotIn("Java", profile.hard_found + profile.hard_missing)

    def test_short_terms_match_regardless_of_case(self):
        vocabulary = LocalSkillVocabulary(hard=["R", "AI", "Python"], soft=[])
        profile = diff_skills("Built AI models in R.", "experience with ai tooling; r required", vocabulary)
        self.assertEqual(profile.hard_found, ["R", "AI"])
        self.assertEqual(profile.hard_missing, [])
        self.assertNotIn("R", diff_skills("", "rust and react", vocabulary).hard_missing)

    def test_missing_skills_carry_strong_negative_weight(self):
        profile = diff_skills("No overlap here", "Python and AWS", _vocabulary())
        for skill in profile.hard_missing:
            self.assertLessEqual(profile.impact_weights[skill], -20)

    def test_more_emphasis_never_lowers_weight(self):
        light_job = "Python"
        heavy_job = "Requirements:\n- Python (required)\nPython daily. Python tooling. Python tests."
        light = emphasis_level(light_job, requirements_section(light_job), "Python")
        heavy = emphasis_level(heavy_job, requirements_section(heavy_job), "Python")
        self.assertGreater(heavy, light)
        self.assertGreaterEqual(impact_weight(True, heavy), impact_weight(True, light))
        self.assertEqual(impact_weight(False, heavy), impact_weight(False, light))
        for level in range(4):
            self.assertLessEqual(impact_weight(True, level), impact_weight(True, level + 1))

    def test_missing_skills_ordered_by_emphasis(self):
        job = "Tableau is nice.\nAWS is required. AWS every day."
        profile = diff_skills("Nothing relevant", job, _vocabulary())
        self.assertEqual(profile.hard_missing, ["AWS", "Tableau"])
        self.assertGreater(profile.emphasis["AWS"], profile.emphasis["Tableau"])

    def test_transferable_skills_map_onto_missing_requirements(self):
        profile = diff_skills("Administered MySQL clusters", "PostgreSQL experience required", _vocabulary())
        self.assertEqual(profile.hard_missing, ["PostgreSQL"])
        self.assertEqual(len(profile.transferable), 1)
        self.assertEqual(profile.transferable[0].source, "mysql")
        self.assertEqual(profile.transferable[0].target, "PostgreSQL")
        self.assertAlmostEqual(profile.transferable[0].confidence, 0.8)

    def test_requirements_section_stops_at_next_heading(self):
        job = "About us\nWe build tools.\nRequirements:\n- Python\nBenefits\n- Free lunch"
        section = requirements_section(job)
        self.assertIn("Python", section)
        self.assertNotIn("Free lunch", section)

    def test_empty_job_text_requires_nothing(self):
        profile = diff_skills("Python SQL AWS", "", _vocabulary())
        self.assertEqual(profile.required_hard_count, 0)
        self.assertEqual(profile.impact_weights, {})


class DefaultVocabularyTests(unittest.TestCase):
    def test_bundled_vocabulary_loads(self):
        vocabulary = get_default_vocabulary()
        self.assertIn("Python", vocabulary.hard_skills())
        self.assertIn("SQL", vocabulary.hard_skills())
        self.assertIn("Leadership", vocabulary.soft_skills())
        self.assertTrue(any(target == "Figma" for _, target, _ in vocabulary.transferable_mappings()))

    def test_duplicate_terms_are_collapsed(self):
        vocabulary = LocalSkillVocabulary(hard=["Python", "python", " Python "], soft=[])
        self.assertEqual(vocabulary.hard_skills(), ("Python",))


if __name__ == "__main__":
    unittest.main()
