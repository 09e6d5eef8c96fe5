from __future__ import annotations

from ats_scanner.schemas import MarketContext, SkillProfile

_MAX_RESUME_CHARS = 6000
_MAX_JOB_CHARS = 4000
_INDUSTRIES = "Technology|Marketing|Finance|Healthcare|Education|Sales|Operations|Consulting|Manufacturing|Retail|Government|Non-Profit"


def _clip(text: str, limit: int) -> str:
    return (text or "").strip()[:limit]


def market_prompt(resume_text: str, job_text: str) -> str:
    return f"""Detect the industry of this role and describe its hiring market.

RESUME:
{_clip(resume_text, _MAX_RESUME_CHARS)}

JOB DESCRIPTION:
{_clip(job_text, _MAX_JOB_CHARS)}

Return JSON with exactly these keys:
{{
  "industry": "{_INDUSTRIES}",
  "secondary": ["SaaS", "B2B"],
  "confidence": 0.0,
  "competition": 0,
  "trendingSkills": ["GA4", "Marketing Automation"],
  "decliningSkills": ["Universal Analytics"]
}}
confidence is between 0 and 1. competition is 0-100 (how crowded the applicant pool is)."""


def recruiter_prompt(resume_text: str) -> str:
    return f"""You are a senior recruiter skimming a resume.

RESUME:
{_clip(resume_text, _MAX_RESUME_CHARS)}

Score first-6-seconds impression, authority language and narrative coherence (each 0-100).
List red flags, the strong and weak action verbs used, and 5-7 recruiter tips.

Return JSON with exactly these keys:
{{
  "first6s": 68,
  "authority": 62,
  "narrative": 70,
  "redFlags": ["Job title mismatch with target role"],
  "strongVerbs": ["led"],
  "weakVerbs": ["assisted"],
  "recruiterTips": ["Quantify 3 more bullets with % or $"]
}}"""


def predictions_prompt(
    resume_text: str,
    job_text: str,
    skills: SkillProfile,
    market: MarketContext,
) -> str:
    found = ", ".join(skills.hard_found) or "none"
    missing = ", ".join(skills.hard_missing) or "none"
    return f"""Predict hiring outcomes for this candidate in the {market.industry} industry.

RESUME:
{_clip(resume_text, _MAX_RESUME_CHARS)}

JOB DESCRIPTION:
{_clip(job_text, _MAX_JOB_CHARS)}

HARD SKILLS FOUND: {found}
HARD SKILLS MISSING: {missing}

Return JSON with exactly these keys:
{{
  "hireProbability": {{"point": 55, "band": [40, 70]}},
  "salary": {{"conservative": 70000, "market": 85000, "aggressive": 95000}},
  "automationRisk": 0.25,
  "xFactor": 12,
  "interviewReadiness": {{"technical": 60, "behavioral": 65, "cultural": 70}},
  "drivers": ["+leadership", "-skills"],
  "industryGrowth": "declining|stable|growing|booming"
}}
point and band are 0-100, automationRisk is 0-1, xFactor is 0-30, salaries are yearly USD."""
