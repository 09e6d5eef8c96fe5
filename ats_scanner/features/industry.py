from __future__ import annotations

from ats_scanner.core.config.scoring import get_scoring_value, scoring_float, scoring_int
from ats_scanner.schemas import MarketContext

from .patterns import mentions

_INDUSTRY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Technology": (
        "software", "developer", "engineer", "programming", "code", "technical", "system", "database",
        "web", "mobile", "app",
    ),
    "Marketing": (
        "marketing", "advertising", "social media", "content", "brand", "campaign", "digital", "seo", "sem",
        "analytics",
    ),
    "Finance": (
        "finance", "accounting", "financial", "investment", "banking", "audit", "tax", "budget", "revenue", "cost",
    ),
    "Healthcare": (
        "healthcare", "medical", "patient", "clinical", "hospital", "nurse", "doctor", "pharmaceutical", "health",
    ),
    "Education": ("education", "teaching", "instructor", "curriculum", "student", "academic", "university", "school"),
    "Sales": (
        "sales", "business development", "account management", "customer", "client", "revenue", "quota", "pipeline",
    ),
    "Operations": ("operations", "logistics", "supply chain", "process", "efficiency", "quality", "manufacturing"),
    "Consulting": ("consulting", "advisory", "strategy", "implementation", "transformation", "change management"),
}

_TRENDING_SKILLS: dict[str, tuple[str, ...]] = {
    "Technology": ("React", "TypeScript", "Cloud Computing", "Machine Learning", "DevOps", "Microservices"),
    "Marketing": ("GA4", "Marketing Automation", "Data Analytics", "Content Marketing", "Social Media"),
    "Finance": ("Financial Modeling", "Data Analysis", "Python", "Risk Management", "Compliance"),
    "Healthcare": ("Telemedicine", "Electronic Health Records", "Data Analysis", "Quality Improvement"),
    "Education": ("Online Learning", "Educational Technology", "Curriculum Design", "Assessment"),
    "Sales": ("CRM", "Sales Analytics", "Account-Based Marketing", "Customer Success"),
    "Operations": ("Process Automation", "Data Analytics", "Supply Chain Management", "Quality Control"),
    "Consulting": ("Digital Transformation", "Change Management", "Data Analytics", "Strategy"),
}

_DECLINING_SKILLS: dict[str, tuple[str, ...]] = {
    "Technology": ("jQuery", "Flash", "Internet Explorer Support", "Waterfall Development"),
    "Marketing": ("Universal Analytics", "Traditional Advertising", "Print Marketing"),
    "Finance": ("Manual Bookkeeping", "Paper-based Processes", "Legacy Systems"),
    "Healthcare": ("Paper Records", "Fax Communications", "Manual Scheduling"),
    "Education": ("Traditional Classroom Only", "Paper-based Assessment"),
    "Sales": ("Cold Calling Only", "Manual Lead Tracking", "Paper Contracts"),
    "Operations": ("Manual Inventory", "Paper-based Reporting", "Legacy Systems"),
    "Consulting": ("Traditional Consulting", "Manual Reporting", "Spreadsheet-only Analysis"),
}

_SECONDARY: dict[str, tuple[str, ...]] = {
    "Technology": ("SaaS", "E-commerce", "Fintech", "Healthtech"),
    "Marketing": ("Digital", "B2B", "B2C", "E-commerce"),
    "Finance": ("Fintech", "Banking", "Investment", "Insurance"),
    "Healthcare": ("Telemedicine", "Pharmaceuticals", "Medical Devices"),
    "Education": ("EdTech", "Higher Education", "K-12", "Corporate Training"),
    "Sales": ("B2B", "B2C", "SaaS", "Enterprise"),
    "Operations": ("Manufacturing", "Logistics", "Supply Chain"),
    "Consulting": ("Management", "Technology", "Strategy", "Implementation"),
}


def _industry_scores(text: str) -> dict[str, int]:
    scores: dict[str, int] = {}
    for industry, keywords in _INDUSTRY_KEYWORDS.items():
        scores[industry] = sum(1 for keyword in keywords if mentions(text, keyword))
    return scores


def detect_industry(text: str) -> tuple[str, float]:
    """Return the industry with the most distinct keyword hits and its share of all hits."""
    scores = _industry_scores(text)
    total_hits = sum(scores.values())
    default_industry = str(get_scoring_value("market.default_industry", "Technology"))
    if total_hits <= 0:
        return default_industry, scoring_float("market.default_confidence", 0.35)

    # max() keeps the first of equal scores, so ties resolve in table order.
    primary = max(scores, key=lambda industry: scores[industry])
    return primary, round(scores[primary] / total_hits, 2)


def competition_level(industry: str) -> int:
    table = get_scoring_value("market.competition_by_industry", {}) or {}
    value = table.get(industry, scoring_int("market.default_competition", 65))
    try:
        return max(0, min(100, int(value)))
    except (TypeError, ValueError):
        return scoring_int("market.default_competition", 65)


def detect_market_context(resume_text: str, job_text: str) -> MarketContext:
    combined = f"{resume_text or ''}\n{job_text or ''}"
    industry, confidence = detect_industry(combined)
    return MarketContext(
        industry=industry,
        secondary=list(_SECONDARY.get(industry, ())),
        confidence=confidence,
        competition_level=competition_level(industry),
        trending_skills=list(_TRENDING_SKILLS.get(industry, _TRENDING_SKILLS["Technology"])),
        declining_skills=list(_DECLINING_SKILLS.get(industry, ())),
        source="heuristic",
    )
