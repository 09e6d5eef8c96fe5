from __future__ import annotations

import datetime as dt
import re

from ats_scanner.core.config.scoring import get_scoring_value, scoring_float, scoring_int
from ats_scanner.core.rounding import round_half_up
from ats_scanner.schemas import (
    HireProbability,
    InterviewReadiness,
    PredictiveProfile,
    SalaryBand,
    SkillProfile,
)

from .patterns import QUANTIFIED_RE, any_term, years_in
from .recruiter_signals import authority_language

_LEADERSHIP_TERMS = ("led", "managed", "directed", "supervised", "mentored")
_METRIC_VERB_RE = re.compile(r"\b(increased|decreased|improved|reduced)\b[^\n]{0,60}?\d", re.IGNORECASE)

_FOUNDER_TERMS = ("founded", "launched", "built", "created", "established", "pioneered")
_INNOVATION_TERMS = ("patent", "published", "research", "innovative", "breakthrough", "award")
_SCALE_TERMS = ("million", "billion", "thousand", "enterprise", "global", "international")
_PRESTIGE_SCHOOLS = ("harvard", "stanford", "mit", "berkeley", "yale", "princeton")

# First match wins, in this order.
_ROLE_LEVELS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("senior", "lead"), 1.3),
    (("principal", "staff"), 1.6),
    (("director", "manager"), 1.8),
    (("vp", "vice president"), 2.5),
    (("junior", "entry"), 0.8),
)

_MODERN_SKILLS = ("ai", "machine learning", "cloud", "automation", "python", "data science", "analytics")
_LEADERSHIP_SKILL_RE = re.compile(r"management|leadership|strategy|team", re.IGNORECASE)

_STAR_RE = re.compile(r"\b(achieved|accomplished|resulted in|led to)\b", re.IGNORECASE)
_QUANTIFIED_RESULT_RE = re.compile(r"\d+%|\$\d+|\b(?:increased|decreased)\b[^\n]*?\d", re.IGNORECASE)
_TEAM_LEADERSHIP_RE = re.compile(r"\b(led (?:a |the )?team|managed (?:a |the )?team|mentored|coached)\b", re.IGNORECASE)
_COLLABORATION_RE = re.compile(r"\b(collaborated|teamwork|cross-functional|partnership)\b", re.IGNORECASE)
_ADAPTABILITY_RE = re.compile(r"\b(adapted|flexible|change|agile|pivot)\b", re.IGNORECASE)
_GROWTH_MINDSET_RE = re.compile(r"\b(learned|growth|development|improvement|optimization)\b", re.IGNORECASE)

_GROWTH_VALUES = {"declining", "stable", "growing", "booming"}


def _coverage_percent(skills: SkillProfile) -> int | None:
    required = skills.required_hard_count
    if required == 0:
        return None
    return round_half_up(100 * len(skills.hard_found) / required)


def has_employment_gap(resume_text: str, reference_year: int) -> bool:
    """True when consecutive mentioned years are too far apart or the latest one is stale."""
    years = sorted({year for year in years_in(resume_text) if year <= reference_year})
    if not years:
        return False
    max_gap = scoring_int("predictions.max_year_gap", 2)
    if any(later - earlier > max_gap for earlier, later in zip(years, years[1:])):
        return True
    return years[-1] < reference_year - scoring_int("predictions.max_years_since_latest", 1)


def hire_probability(
    skills: SkillProfile,
    resume_text: str,
    reference_year: int,
) -> tuple[HireProbability, list[str]]:
    coverage = _coverage_percent(skills)
    point = scoring_int("predictions.default_base", 50) if coverage is None else coverage
    drivers: list[str] = []

    found = len(skills.hard_found)
    if found >= scoring_int("predictions.breadth.high_threshold", 8):
        point += scoring_int("predictions.breadth.high_bonus", 5)
        drivers.append("+skills")
    elif found <= scoring_int("predictions.breadth.low_threshold", 3):
        point += scoring_int("predictions.breadth.low_penalty", -8)
        drivers.append("-skills")

    if any_term(resume_text, _LEADERSHIP_TERMS):
        point += scoring_int("predictions.leadership_bonus", 8)
        drivers.append("+leadership")

    if QUANTIFIED_RE.search(resume_text) or _METRIC_VERB_RE.search(resume_text):
        point += scoring_int("predictions.metrics_bonus", 6)
        drivers.append("+metrics")

    if has_employment_gap(resume_text, reference_year):
        point += scoring_int("predictions.gap_penalty", -10)
        drivers.append("-gaps")
    else:
        point += scoring_int("predictions.trajectory_bonus", 3)
        drivers.append("+trajectory")

    point = max(scoring_int("predictions.point_min", 5), min(scoring_int("predictions.point_max", 95), point))
    width = scoring_int("predictions.band_width", 15)
    lower = max(scoring_int("predictions.band_min", 1), point - width)
    upper = min(scoring_int("predictions.band_max", 99), point + width)
    return HireProbability(point=point, band=(lower, upper)), drivers


def x_factor(resume_text: str) -> int:
    score = 0
    if any_term(resume_text, _FOUNDER_TERMS):
        score += scoring_int("predictions.x_factor.founder", 15)
    if any_term(resume_text, _INNOVATION_TERMS):
        score += scoring_int("predictions.x_factor.innovation", 10)
    if any_term(resume_text, _SCALE_TERMS):
        score += scoring_int("predictions.x_factor.scale", 8)

    strong, weak = authority_language(resume_text)
    ratio = len(strong) / max(1, len(strong) + len(weak))
    if ratio > scoring_float("predictions.x_factor.strong_language_ratio", 0.7):
        score += scoring_int("predictions.x_factor.strong_language", 7)

    if any_term(resume_text, _PRESTIGE_SCHOOLS):
        score += scoring_int("predictions.x_factor.prestige", 5)
    return min(scoring_int("predictions.x_factor.cap", 30), score)


def role_level_multiplier(job_text: str) -> float:
    for terms, multiplier in _ROLE_LEVELS:
        if any_term(job_text, terms):
            return multiplier
    return 1.0


def salary_band(industry: str, job_text: str, skill_count: int) -> SalaryBand:
    bases = get_scoring_value("predictions.salary.base_by_industry", {}) or {}
    base = float(bases.get(industry, scoring_int("predictions.salary.default_base", 65000)))
    skill_multiplier = 1 + scoring_float("predictions.salary.skill_step", 0.02) * min(
        max(0, skill_count), scoring_int("predictions.salary.skill_cap", 15)
    )
    market = round_half_up(base * role_level_multiplier(job_text) * skill_multiplier)
    return SalaryBand(
        conservative=round_half_up(market * scoring_float("predictions.salary.conservative_ratio", 0.85)),
        market=market,
        aggressive=round_half_up(market * scoring_float("predictions.salary.aggressive_ratio", 1.15)),
    )


def automation_risk(industry: str, skills: SkillProfile) -> float:
    risks = get_scoring_value("predictions.automation.risk_by_industry", {}) or {}
    floor = scoring_float("predictions.automation.floor", 0.05)
    ceiling = scoring_float("predictions.automation.ceiling", 0.95)
    base = float(risks.get(industry, scoring_float("predictions.automation.default_risk", 0.30)))
    base = max(floor, min(ceiling, base))

    modern_count = sum(1 for skill in skills.hard_found if any_term(skill, _MODERN_SKILLS))
    reduction = min(
        scoring_float("predictions.automation.modern_skill_max_reduction", 0.25),
        modern_count * scoring_float("predictions.automation.modern_skill_step", 0.05),
    )
    if any(_LEADERSHIP_SKILL_RE.search(skill) for skill in (*skills.hard_found, *skills.soft_found)):
        reduction += scoring_float("predictions.automation.leadership_reduction", 0.10)
    return round(max(floor, base - reduction), 2)


def interview_readiness(skills: SkillProfile, resume_text: str) -> InterviewReadiness:
    coverage = _coverage_percent(skills)
    technical = 50 if coverage is None else coverage

    behavioral = scoring_int("predictions.interview_readiness.behavioral_base", 50)
    if _STAR_RE.search(resume_text):
        behavioral += scoring_int("predictions.interview_readiness.star_points", 20)
    if _QUANTIFIED_RESULT_RE.search(resume_text):
        behavioral += scoring_int("predictions.interview_readiness.quantified_points", 15)
    if _TEAM_LEADERSHIP_RE.search(resume_text):
        behavioral += scoring_int("predictions.interview_readiness.leadership_points", 10)

    cultural = scoring_int("predictions.interview_readiness.cultural_base", 55)
    if _COLLABORATION_RE.search(resume_text):
        cultural += scoring_int("predictions.interview_readiness.collaboration_points", 15)
    if _ADAPTABILITY_RE.search(resume_text):
        cultural += scoring_int("predictions.interview_readiness.adaptability_points", 10)
    if _GROWTH_MINDSET_RE.search(resume_text):
        cultural += scoring_int("predictions.interview_readiness.growth_points", 10)

    return InterviewReadiness(
        technical=max(0, min(100, technical)),
        behavioral=max(0, min(100, behavioral)),
        cultural=max(0, min(100, cultural)),
    )


def industry_growth(industry: str) -> str:
    table = get_scoring_value("predictions.industry_growth", {}) or {}
    growth = str(table.get(industry, "stable")).lower()
    return growth if growth in _GROWTH_VALUES else "stable"


def score_predictions(
    skills: SkillProfile,
    industry: str,
    resume_text: str,
    job_text: str = "",
    reference_year: int | None = None,
) -> PredictiveProfile:
    text = resume_text or ""
    year = reference_year if reference_year is not None else dt.date.today().year
    hire, drivers = hire_probability(skills, text, year)
    return PredictiveProfile(
        hire_probability=hire,
        salary=salary_band(industry, job_text or "", len(skills.hard_found)),
        automation_risk=automation_risk(industry, skills),
        x_factor=x_factor(text),
        interview_readiness=interview_readiness(skills, text),
        drivers=drivers,
        industry_growth=industry_growth(industry),  # type: ignore[arg-type]
        source="heuristic",
    )
