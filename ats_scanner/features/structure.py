from __future__ import annotations

import re

from ats_scanner.core.config.scoring import scoring_int
from ats_scanner.schemas import (
    ContactInfo,
    FileMeta,
    JobTitleMatch,
    SectionPresence,
    StructuralProfile,
)

from .patterns import MONTH_YEAR_RE, WORD_SPLIT_RE, YEAR_RE, has_email, has_phone
from .similarity import jaro_winkler

_SUPPORTED_MIME_RE = re.compile(r"pdf|word|officedocument|text/plain", re.IGNORECASE)
_UNSAFE_FILENAME_RE = re.compile(r"[^\w\-.]")

# Loose on purpose: an alias anywhere in the text counts, not only a heading line.
_SECTION_ALIASES: dict[str, tuple[str, ...]] = {
    "experience": ("experience", "work experience", "employment", "professional experience", "work history"),
    "education": ("education", "academic", "degree", "university", "college"),
    "skills": ("skills", "competencies", "technical skills", "proficiencies"),
    "summary": ("summary", "profile", "objective", "about me"),
}

_SECTION_HEADER_WORDS = ("education", "experience", "skills", "summary", "projects", "certifications")

_STATE_CODES = (
    "AL|AK|AZ|AR|CA|CO|CT|DE|DC|FL|GA|HI|ID|IL|IN|IA|KS|KY|LA|ME|MD|MA|MI|MN|MS|MO|MT|NE|NV|NH|NJ|NM|NY|"
    "NC|ND|OH|OK|OR|PA|RI|SC|SD|TN|TX|UT|VT|VA|WA|WV|WI|WY"
)
_STATE_AND_COUNTRY_NAMES = (
    "Alabama|Alaska|Arizona|Arkansas|California|Colorado|Connecticut|Delaware|Florida|Georgia|Hawaii|Idaho|"
    "Illinois|Indiana|Iowa|Kansas|Kentucky|Louisiana|Maine|Maryland|Massachusetts|Michigan|Minnesota|"
    "Mississippi|Missouri|Montana|Nebraska|Nevada|New Hampshire|New Jersey|New Mexico|New York|"
    "North Carolina|North Dakota|Ohio|Oklahoma|Oregon|Pennsylvania|Rhode Island|South Carolina|"
    "South Dakota|Tennessee|Texas|Utah|Vermont|Virginia|Washington|West Virginia|Wisconsin|Wyoming|"
    "USA|United States|UK|United Kingdom|Canada|Germany|France|India|Australia|Ireland|Netherlands|Spain"
)
_LOCATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b[A-Z][A-Za-z.'-]+(?:\s[A-Z][A-Za-z.'-]+){{0,2}},\s?(?:{_STATE_CODES})\b"),
    re.compile(rf"\b[A-Z][A-Za-z.'-]+(?:\s[A-Z][A-Za-z.'-]+){{0,2}},\s?(?:{_STATE_AND_COUNTRY_NAMES})\b"),
    re.compile(r"\b\d{5}(?:-\d{4})?\b"),
    re.compile(r"\bremote\b", re.IGNORECASE),
)

_LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+|\blinkedin\b", re.IGNORECASE)
_GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)
_URL_RE = re.compile(r"https?://([\w.-]+\.[a-z]{2,})", re.IGNORECASE)
_BARE_DOMAIN_RE = re.compile(
    r"(?<![@\w.])(?:www\.)?((?:[a-z0-9-]+\.)+(?:com|io|dev|me|net|org|co|app|site|xyz|design|tech|page|blog))\b",
    re.IGNORECASE,
)
_NON_PORTFOLIO_DOMAINS = ("gmail", "yahoo", "outlook", "hotmail", "linkedin", "github")
# Framework names that look like bare domains.
_TECH_NAMES = frozenset({"asp.net", "ado.net", "vb.net", "dot.net", "socket.io", "dash.io", "cordova.io", "ionic.io"})


def is_supported_file_type(mime_type: str) -> bool:
    return bool(_SUPPORTED_MIME_RE.search(mime_type or ""))


def is_safe_filename(filename: str) -> bool:
    return _UNSAFE_FILENAME_RE.search(filename or "") is None


def _detect_location(text: str) -> bool:
    return any(pattern.search(text) for pattern in _LOCATION_PATTERNS)


def _is_portfolio_domain(domain: str) -> bool:
    lowered = domain.lower()
    if lowered.removeprefix("www.") in _TECH_NAMES:
        return False
    return not any(blocked in lowered for blocked in _NON_PORTFOLIO_DOMAINS)


def detect_web_presence(text: str) -> list[str]:
    links: set[str] = set()
    if _LINKEDIN_RE.search(text):
        links.add("linkedin")
    if _GITHUB_RE.search(text):
        links.add("github")
    domains = [match.group(1) for match in _URL_RE.finditer(text)]
    domains.extend(match.group(1) for match in _BARE_DOMAIN_RE.finditer(text))
    if any(_is_portfolio_domain(domain) for domain in domains):
        links.add("portfolio")
    return sorted(links)


def _detect_sections(lowered: str) -> SectionPresence:
    found = {
        name: any(alias in lowered for alias in aliases)
        for name, aliases in _SECTION_ALIASES.items()
    }
    return SectionPresence(
        has_experience=found["experience"],
        has_education=found["education"],
        has_skills=found["skills"],
        has_summary=found["summary"],
    )


def _dates_valid(text: str) -> bool:
    return bool(YEAR_RE.search(text) or MONTH_YEAR_RE.search(text))


def count_words(text: str) -> int:
    stripped = (text or "").strip()
    if not stripped:
        return 0
    return len(WORD_SPLIT_RE.split(stripped))


def word_count_status(word_count: int) -> str:
    under = scoring_int("structure.word_count.under", 400)
    over = scoring_int("structure.word_count.over", 1200)
    if word_count < under:
        return "under"
    if word_count > over:
        return "over"
    return "optimal"


def title_candidates(resume_text: str) -> list[str]:
    min_length = scoring_int("structure.title_candidates.min_length", 3)
    max_length = scoring_int("structure.title_candidates.max_length", 100)
    max_lines = scoring_int("structure.title_candidates.max_lines", 10)

    candidates: list[str] = []
    for raw_line in resume_text.splitlines():
        line = raw_line.strip()
        if not (min_length <= len(line) <= max_length):
            continue
        if not line[0].isupper():
            continue
        if line.lower().startswith(_SECTION_HEADER_WORDS):
            continue
        candidates.append(line)
        if len(candidates) >= max_lines:
            break
    return candidates


def match_job_title(resume_text: str, job_title: str) -> JobTitleMatch:
    title = " ".join((job_title or "").split())
    if not title:
        return JobTitleMatch(exact=False, similarity=0.0)

    exact_re = re.compile(rf"(?<!\w){re.escape(title)}(?!\w)", re.IGNORECASE)
    if exact_re.search(resume_text):
        return JobTitleMatch(exact=True, similarity=1.0)

    lowered_title = title.lower()
    best = 0.0
    for candidate in title_candidates(resume_text):
        best = max(best, jaro_winkler(lowered_title, candidate.lower()))
    return JobTitleMatch(exact=False, similarity=round(best, 2))


def extract_structure(resume_text: str, job_title: str, file_meta: FileMeta) -> StructuralProfile:
    text = resume_text or ""
    word_count = count_words(text)
    return StructuralProfile(
        file_type_ok=is_supported_file_type(file_meta.mime_type),
        file_name_ok=is_safe_filename(file_meta.filename),
        contact=ContactInfo(
            has_email=has_email(text),
            has_phone=has_phone(text),
            has_location=_detect_location(text),
            links=detect_web_presence(text),
        ),
        sections=_detect_sections(text.lower()),
        dates_valid=_dates_valid(text),
        word_count=word_count,
        word_count_status=word_count_status(word_count),  # type: ignore[arg-type]
        job_title_match=match_job_title(text, job_title),
    )
