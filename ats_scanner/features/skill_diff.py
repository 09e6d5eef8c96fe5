from __future__ import annotations

import re

from ats_scanner.core.config.scoring import scoring_int
from ats_scanner.schemas import SkillProfile, TransferableSkill
from ats_scanner.taxonomy import SkillVocabularyProvider

from .patterns import count_mentions, mentions, term_pattern

_REQUIREMENT_HEADING_RE = re.compile(
    r"\b(requirements?|qualifications?|must[- ]haves?|what you(?:'ll)? need|what you bring|you have)\b",
    re.IGNORECASE,
)
_OTHER_HEADING_RE = re.compile(
    r"\b(preferred|nice to have|bonus|benefits|perks|about (?:us|the company|the role)|responsibilities|"
    r"what you(?:'ll)? do|compensation|how to apply)\b",
    re.IGNORECASE,
)
_EMPHASIS_KEYWORD_RE = re.compile(
    r"\b(required|must have|must-have|essential|critical|key|important|mandatory)\b",
    re.IGNORECASE,
)
_MAX_HEADING_WORDS = 6


def _looks_like_heading(line: str) -> bool:
    stripped = line.strip().rstrip(":").strip()
    if not stripped:
        return False
    return line.strip().endswith(":") or len(stripped.split()) <= _MAX_HEADING_WORDS


def requirements_section(job_text: str) -> str:
    """Return the lines of the job text that sit under a requirements-style heading."""
    collected: list[str] = []
    inside = False
    for line in (job_text or "").splitlines():
        if _looks_like_heading(line):
            if _REQUIREMENT_HEADING_RE.search(line):
                inside = True
                _, _, inline = line.partition(":")
                if inline.strip():
                    collected.append(inline)
                continue
            if _OTHER_HEADING_RE.search(line):
                inside = False
                continue
        if inside:
            collected.append(line)
    return "\n".join(collected)


def _near_emphasis_keyword(job_text: str, term: str, window: int) -> bool:
    pattern = term_pattern(term)
    for match in pattern.finditer(job_text):
        start = max(0, match.start() - window)
        context = job_text[start : match.end() + window]
        if _EMPHASIS_KEYWORD_RE.search(context):
            return True
    return False


def emphasis_level(job_text: str, requirements_text: str, term: str) -> int:
    """0..4: repeated mention, frequent mention, listed under requirements, near an emphasis keyword."""
    window = scoring_int("skills.emphasis_context_chars", 100)
    occurrences = count_mentions(job_text, term)
    level = 0
    if occurrences > 1:
        level += 1
    if occurrences > 3:
        level += 1
    if requirements_text and mentions(requirements_text, term):
        level += 1
    if _near_emphasis_keyword(job_text, term, window):
        level += 1
    return level


def impact_weight(found: bool, emphasis: int) -> int:
    if not found:
        return scoring_int("skills.missing_weight", -20)
    base = scoring_int("skills.found_base_weight", 1)
    step = scoring_int("skills.found_weight_per_emphasis", 2)
    return base + step * max(0, emphasis)


def _transferable_for(
    resume_text: str,
    missing: list[str],
    vocabulary: SkillVocabularyProvider,
) -> list[TransferableSkill]:
    missing_by_key = {skill.lower(): skill for skill in missing}
    output: list[TransferableSkill] = []
    seen: set[tuple[str, str]] = set()
    for source, target, confidence in vocabulary.transferable_mappings():
        target_skill = missing_by_key.get(target.lower())
        if target_skill is None or (source, target_skill) in seen:
            continue
        if not mentions(resume_text, source):
            continue
        seen.add((source, target_skill))
        output.append(TransferableSkill(source=source, target=target_skill, confidence=confidence))
    return output


def diff_skills(resume_text: str, job_text: str, vocabulary: SkillVocabularyProvider) -> SkillProfile:
    resume = resume_text or ""
    job = job_text or ""
    requirements_text = requirements_section(job)

    hard_found: list[str] = []
    hard_missing: list[str] = []
    emphasis: dict[str, int] = {}
    weights: dict[str, int] = {}
    for skill in vocabulary.hard_skills():
        if not mentions(job, skill):
            continue
        level = emphasis_level(job, requirements_text, skill)
        found = mentions(resume, skill)
        emphasis[skill] = level
        weights[skill] = impact_weight(found, level)
        (hard_found if found else hard_missing).append(skill)

    soft_found: list[str] = []
    soft_missing: list[str] = []
    for skill in vocabulary.soft_skills():
        if not mentions(job, skill):
            continue
        found = mentions(resume, skill)
        weights[skill] = impact_weight(found, emphasis_level(job, requirements_text, skill))
        (soft_found if found else soft_missing).append(skill)

    # Stable: vocabulary order breaks emphasis ties.
    hard_missing.sort(key=lambda skill: -emphasis[skill])

    return SkillProfile(
        hard_found=hard_found,
        hard_missing=hard_missing,
        soft_found=soft_found,
        soft_missing=soft_missing,
        impact_weights=weights,
        emphasis=emphasis,
        transferable=_transferable_for(resume, hard_missing, vocabulary),
    )
