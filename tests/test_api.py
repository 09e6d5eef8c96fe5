import dataclasses
import sys
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_scanner.api.v1.scan import enrichment_provider_dependency  # noqa: E402
from ats_scanner.core.config import settings  # noqa: E402
from ats_scanner.enrichment import DisabledEnrichmentProvider  # noqa: E402
from ats_scanner.main import app  # noqa: E402


class ScanApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        app.dependency_overrides[enrichment_provider_dependency] = lambda: DisabledEnrichmentProvider("tests")
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls):
        app.dependency_overrides.pop(enrichment_provider_dependency, None)

    def setUp(self):
        self.payload = {
            "resume_text": (
                "Sam Lee\n"
                "sam@example.com | 555-123-4567 | Remote\n"
                "Backend Engineer\n\n"
                "Experience\n"
                "- Led migration of Python services to AWS, cutting costs 30%.\n"
                "- Designed SQL reporting used by 12 teams, 2020 - 2024.\n\n"
                "Skills\nPython, SQL, Docker\n"
            ),
            "job_description_text": (
                "Backend Engineer\nRequirements:\nPython, SQL and Kubernetes experience required."
            ),
            "file_meta": {"filename": "sam_lee.pdf", "mime_type": "application/pdf"},
        }

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertIn(body["enrichment"], {"configured", "heuristic"})

    def test_scan_contract(self):
        response = self.client.post("/v1/ats/scan", json=self.payload)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(set(body["provenance"].values()), {"heuristic"})
        self.assertIn("Kubernetes", body["skills"]["hard_missing"])
        self.assertTrue(0 <= body["report"]["overall_score"] <= 100)
        self.assertEqual(
            set(body["report"]["breakdown"]),
            {"ats_compatibility", "skill_match", "recruiter_psychology", "market_alignment", "predictions"},
        )
        self.assertLessEqual(len(body["report"]["priority_fixes"]), 5)

    def test_short_resume_is_rejected(self):
        response = self.client.post("/v1/ats/scan", json={**self.payload, "resume_text": "too short"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"]["code"], "resume_too_short")

    def test_api_key_is_enforced_when_configured(self):
        with mock.patch("ats_scanner.core.security.settings", dataclasses.replace(settings, api_key="secret")):
            denied = self.client.post("/v1/ats/scan", json=self.payload)
            allowed = self.client.post("/v1/ats/scan", json=self.payload, headers={"X-API-Key": "secret"})
        self.assertEqual(denied.status_code, 401)
        self.assertEqual(allowed.status_code, 200)


if __name__ == "__main__":
    unittest.main()
