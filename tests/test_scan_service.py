import asyncio
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_scanner.core.config import settings  # noqa: E402
from ats_scanner.enrichment import EnrichmentError  # noqa: E402
from ats_scanner.schemas import FileMeta, RawInput  # noqa: E402
from ats_scanner.services import ScanInputError, run_scan, validate_input  # noqa: E402
from ats_scanner.taxonomy import LocalSkillVocabulary  # noqa: E402

RESUME = """Jane Doe
jane@example.com | (555) 123-4567 | Austin, TX
Data Analyst

Summary
Analyst with SQL and Python experience. Led reporting for the sales team.

Experience
- Increased dashboard adoption 40% across 3 regions.
- Built SQL pipelines for finance, 2021 - 2023.

Education
BS Statistics, 2020
"""

JOB = """Data Analyst
Requirements:
Strong SQL and Python. AWS is required. Communication skills.
"""

VOCABULARY = LocalSkillVocabulary(
    hard=["SQL", "Python", "AWS", "Tableau"],
    soft=["Communication", "Leadership"],
)


def _raw(resume=RESUME, job=JOB, mime_type="text/plain"):
    return RawInput(
        resume_text=resume,
        job_description_text=job,
        file_meta=FileMeta(filename="jane_doe_resume.pdf", mime_type=mime_type),
    )


class ScriptedProvider:
    def __init__(self, market_industry="Finance"):
        self.prompts = []
        self._market_industry = market_industry

    async def generate_structured_analysis(self, prompt):
        self.prompts.append(prompt)
        if prompt.startswith("Detect the industry"):
            return {"industry": self._market_industry, "confidence": 0.9, "competition": 60, "trendingSkills": ["Python"]}
        if prompt.startswith("You are a senior recruiter"):
            return {"first6s": 80, "authority": 70, "narrative": 60, "redFlags": ["Thin summary"]}
        if prompt.startswith("Predict hiring outcomes"):
            return {
                "hireProbability": {"point": 70, "band": [60, 80]},
                "salary": {"conservative": 60000, "market": 70000, "aggressive": 80000},
                "automationRisk": 0.2,
            }
        raise AssertionError(f"unexpected prompt: {prompt[:40]}")


class FailingProvider:
    def __init__(self):
        self.calls = 0

    async def generate_structured_analysis(self, prompt):
        self.calls += 1
        raise RuntimeError("upstream timed out")


class DisabledCountingProvider:
    def __init__(self):
        self.calls = 0

    async def generate_structured_analysis(self, prompt):
        self.calls += 1
        raise EnrichmentError("not configured", code="llm_disabled")


class GarbageProvider:
    def __init__(self):
        self.calls = 0

    async def generate_structured_analysis(self, prompt):
        self.calls += 1
        return {"unexpected": True}


class ValidateInputTests(unittest.TestCase):
    def test_rejects_short_resume(self):
        with self.assertRaises(ScanInputError) as ctx:
            validate_input(_raw(resume="too short"))
        self.assertEqual(ctx.exception.code, "resume_too_short")

    def test_rejects_missing_job_description(self):
        with self.assertRaises(ScanInputError) as ctx:
            validate_input(_raw(job="   "))
        self.assertEqual(ctx.exception.code, "job_description_missing")

    def test_rejects_unsupported_mime_type(self):
        with self.assertRaises(ScanInputError) as ctx:
            validate_input(_raw(mime_type="image/png"))
        self.assertEqual(ctx.exception.code, "unsupported_file_type")

    def test_blank_mime_type_is_allowed(self):
        validate_input(_raw(mime_type=""))


class RunScanTests(unittest.TestCase):
    def test_enriched_scan_uses_model_output(self):
        provider = ScriptedProvider()
        report = asyncio.run(run_scan(_raw(), provider=provider, vocabulary=VOCABULARY, reference_year=2024))

        self.assertEqual(
            report.provenance,
            {"market": "enrichment", "recruiter_signals": "enrichment", "predictions": "enrichment"},
        )
        self.assertEqual(report.market.industry, "Finance")
        self.assertEqual(report.recruiter_signals.first6s_score, 80)
        self.assertEqual(report.predictions.hire_probability.point, 70)
        self.assertEqual(len(provider.prompts), 3)
        self.assertTrue(provider.prompts[-1].startswith("Predict hiring outcomes for this candidate in the Finance industry"))

    def test_skill_diff_is_never_enriched(self):
        report = asyncio.run(
            run_scan(_raw(), provider=ScriptedProvider(), vocabulary=VOCABULARY, reference_year=2024)
        )
        self.assertEqual(report.skills.hard_found, ["SQL", "Python"])
        self.assertEqual(report.skills.hard_missing, ["AWS"])
        self.assertEqual(report.skills.soft_found, [])
        self.assertEqual(report.skills.soft_missing, ["Communication"])

    def test_failing_provider_falls_back_after_retries(self):
        provider = FailingProvider()
        with self.assertLogs("ats_scanner.services.scan_service", level="WARNING"):
            report = asyncio.run(run_scan(_raw(), provider=provider, vocabulary=VOCABULARY, reference_year=2024))
        self.assertEqual(provider.calls, 3 * settings.enrichment_max_attempts)
        self.assertEqual(set(report.provenance.values()), {"heuristic"})
        self.assertEqual(report.market.source, "heuristic")
        self.assertEqual(report.predictions.source, "heuristic")

    def test_disabled_provider_is_not_retried(self):
        provider = DisabledCountingProvider()
        report = asyncio.run(run_scan(_raw(), provider=provider, vocabulary=VOCABULARY, reference_year=2024))
        self.assertEqual(provider.calls, 3)
        self.assertEqual(set(report.provenance.values()), {"heuristic"})

    def test_unparseable_payload_falls_back(self):
        provider = GarbageProvider()
        report = asyncio.run(run_scan(_raw(), provider=provider, vocabulary=VOCABULARY, reference_year=2024))
        self.assertEqual(provider.calls, 3 * settings.enrichment_max_attempts)
        self.assertEqual(set(report.provenance.values()), {"heuristic"})

    def test_heuristic_scan_is_deterministic(self):
        first = asyncio.run(
            run_scan(_raw(), provider=DisabledCountingProvider(), vocabulary=VOCABULARY, reference_year=2024)
        )
        second = asyncio.run(
            run_scan(_raw(), provider=DisabledCountingProvider(), vocabulary=VOCABULARY, reference_year=2024)
        )
        self.assertEqual(first.model_dump(), second.model_dump())
        self.assertTrue(0 <= first.report.overall_score <= 100)
        self.assertTrue(5 <= first.report.percentile <= 95)
        self.assertTrue(first.structural.contact.has_email)
        self.assertTrue(first.structural.contact.has_phone)
        self.assertTrue(first.structural.job_title_match.exact)

    def test_invalid_input_is_raised_before_enrichment(self):
        provider = FailingProvider()
        with self.assertRaises(ScanInputError):
            asyncio.run(run_scan(_raw(resume="short"), provider=provider, vocabulary=VOCABULARY))
        self.assertEqual(provider.calls, 0)


if __name__ == "__main__":
    unittest.main()
