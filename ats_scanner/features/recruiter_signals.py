from __future__ import annotations

import re

from ats_scanner.core.config.scoring import scoring_int
from ats_scanner.schemas import RecruiterSignalProfile

from .patterns import (
    BLANK_LINE_SPLIT_RE,
    BULLET_LINE_RE,
    YEAR_RE,
    count_quantified_claims,
    has_email,
    has_phone,
    mentions,
)

STRONG_VERBS = ("led", "managed", "created", "developed", "increased", "achieved", "designed")
WEAK_VERBS = ("helped", "assisted", "worked on", "participated", "contributed")

_SUMMARY_KEYWORD_RE = re.compile(r"\b(summary|objective|profile)\b", re.IGNORECASE)
_ROLE_NOUN_RE = re.compile(
    r"\b(engineer|developer|manager|marketer|analyst|designer|specialist|consultant|director|lead|"
    r"coordinator|scientist|architect|writer|accountant|nurse|teacher|executive|officer|administrator|"
    r"associate|intern|representative|strategist|producer|editor)s?\b",
    re.IGNORECASE,
)
_MAX_TITLE_LINE_CHARS = 60
_MAX_TITLE_LINE_WORDS = 8

_FALLBACK_TIPS = (
    'Add strong action verbs like "led", "created", "increased"',
    "Quantify achievements with specific numbers and percentages",
    "Include a compelling professional summary at the top",
    "Ensure contact information is clearly visible",
    "Use consistent formatting throughout the document",
    "Highlight relevant keywords from job descriptions",
    'Remove or minimize weak language like "helped" or "assisted"',
)
_FALLBACK_TIP_COUNT = 5


def authority_language(resume_text: str) -> tuple[list[str], list[str]]:
    """Return the strong and weak action verbs the resume uses, in vocabulary order."""
    strong = [verb for verb in STRONG_VERBS if mentions(resume_text, verb)]
    weak = [verb for verb in WEAK_VERBS if mentions(resume_text, verb)]
    return strong, weak


def has_title_line(resume_text: str) -> bool:
    for raw_line in resume_text.splitlines():
        line = raw_line.strip()
        if not line or len(line) > _MAX_TITLE_LINE_CHARS:
            continue
        if len(line.split()) > _MAX_TITLE_LINE_WORDS:
            continue
        if "@" in line or any(char.isdigit() for char in line):
            continue
        if _ROLE_NOUN_RE.search(line):
            return True
    return False


def _has_summary_near_top(resume_text: str) -> bool:
    window = scoring_int("recruiter.summary_window_chars", 500)
    return bool(_SUMMARY_KEYWORD_RE.search(resume_text[:window]))


def first_impression_score(resume_text: str) -> int:
    points = scoring_int("recruiter.first6s_indicator_points", 25)
    indicators = (
        has_email(resume_text),
        has_phone(resume_text),
        has_title_line(resume_text),
        _has_summary_near_top(resume_text),
    )
    return points * sum(1 for indicator in indicators if indicator)


def authority_score(strong: list[str], weak: list[str], quantified_claims: int) -> int:
    raw = (
        scoring_int("recruiter.authority.strong_points", 15) * len(strong)
        + scoring_int("recruiter.authority.quantified_points", 5) * quantified_claims
        - scoring_int("recruiter.authority.weak_penalty", 10) * len(weak)
    )
    return max(0, min(100, raw))


def narrative_score(resume_text: str) -> int:
    sections = [chunk for chunk in BLANK_LINE_SPLIT_RE.split(resume_text) if chunk.strip()]
    score = 0
    if len(sections) >= scoring_int("recruiter.narrative.sections_min", 3):
        score += scoring_int("recruiter.narrative.sections_points", 40)
    if BULLET_LINE_RE.search(resume_text):
        score += scoring_int("recruiter.narrative.bullets_points", 30)
    if YEAR_RE.search(resume_text):
        score += scoring_int("recruiter.narrative.years_points", 30)
    return min(100, score)


def red_flags(
    resume_text: str,
    strong: list[str],
    weak: list[str],
    quantified_claims: int,
) -> list[str]:
    flags: list[str] = []
    if not has_email(resume_text):
        flags.append("Missing email address")
    if not has_phone(resume_text):
        flags.append("Missing phone number")
    if len(weak) > len(strong):
        flags.append("Too many weak action verbs")
    if quantified_claims < scoring_int("recruiter.min_quantified_claims", 3):
        flags.append("Insufficient quantification")
    if not _has_summary_near_top(resume_text):
        flags.append("Missing professional summary")
    return flags


def score_recruiter_signals(resume_text: str) -> RecruiterSignalProfile:
    text = resume_text or ""
    strong, weak = authority_language(text)
    quantified = count_quantified_claims(text)
    return RecruiterSignalProfile(
        first6s_score=first_impression_score(text),
        authority_score=authority_score(strong, weak, quantified),
        narrative_score=narrative_score(text),
        red_flags=red_flags(text, strong, weak, quantified),
        strong_verbs=strong,
        weak_verbs=weak,
        recruiter_tips=list(_FALLBACK_TIPS[:_FALLBACK_TIP_COUNT]),
        source="heuristic",
    )
