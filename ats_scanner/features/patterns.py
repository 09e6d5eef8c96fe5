from __future__ import annotations

import re

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+", re.IGNORECASE)
PHONE_RE = re.compile(r"(?<![\w+])(?:\+?\d{1,3}[ .-]?)?\(?\d{3}\)?[ .-]?\d{3}[ .-]?\d{4}(?!\d)")
INTERNATIONAL_PHONE_RE = re.compile(r"\+\d{1,3}(?:[ .-]?\(?\d{1,4}\)?){2,5}")
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
MONTH_YEAR_RE = re.compile(
    r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+\d{4}\b",
    re.IGNORECASE,
)
BULLET_LINE_RE = re.compile(
    r"^\s*(?:[-*]|[•·▪▫●◦⁃‣∙]|(?:\d+[\.\)]))\s+",
    re.MULTILINE,
)
QUANTIFIED_RE = re.compile(r"\d+(?:\.\d+)?\s?%|\$\s?\d[\d,.]*|\b\d+\+")
BLANK_LINE_SPLIT_RE = re.compile(r"\n\s*\n")
WORD_SPLIT_RE = re.compile(r"\s+")

_MIN_PHONE_DIGITS = 10
_MAX_PHONE_DIGITS = 15


def has_email(text: str) -> bool:
    return bool(EMAIL_RE.search(text or ""))


def has_phone(text: str) -> bool:
    """North American grouping, or a +CC number of 10-15 digits."""
    if PHONE_RE.search(text or ""):
        return True
    for match in INTERNATIONAL_PHONE_RE.finditer(text or ""):
        digits = sum(1 for char in match.group(0) if char.isdigit())
        if _MIN_PHONE_DIGITS <= digits <= _MAX_PHONE_DIGITS:
            return True
    return False


def years_in(text: str) -> list[int]:
    return [int(value) for value in YEAR_RE.findall(text or "")]


def count_quantified_claims(text: str) -> int:
    return len(QUANTIFIED_RE.findall(text or ""))


def term_pattern(term: str) -> re.Pattern[str]:
    """Whole-term pattern that tolerates terms like 'C++' or 'Node.js'."""
    return re.compile(rf"(?<!\w){re.escape(term.strip())}(?!\w)", re.IGNORECASE)


def mentions(text: str, term: str) -> bool:
    if not term or not term.strip():
        return False
    return bool(term_pattern(term).search(text or ""))


def count_mentions(text: str, term: str) -> int:
    if not term or not term.strip():
        return 0
    return len(term_pattern(term).findall(text or ""))


def any_term(text: str, terms: tuple[str, ...]) -> bool:
    return any(mentions(text, term) for term in terms)
