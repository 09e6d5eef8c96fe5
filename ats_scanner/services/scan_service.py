from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, TypeVar

from ats_scanner.core.config import settings
from ats_scanner.core.config.scoring import scoring_int
from ats_scanner.enrichment import EnrichmentError, EnrichmentProvider
from ats_scanner.enrichment.prompts import market_prompt, predictions_prompt, recruiter_prompt
from ats_scanner.features import (
    detect_market_context,
    diff_skills,
    extract_structure,
    score_predictions,
    score_recruiter_signals,
)
from ats_scanner.features.structure import is_supported_file_type
from ats_scanner.schemas import (
    MarketContext,
    ParseOk,
    ParseResult,
    PredictiveProfile,
    RawInput,
    RecruiterSignalProfile,
    ScanReport,
)
from ats_scanner.scoring import aggregate
from ats_scanner.taxonomy import SkillVocabularyProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScanInputError(ValueError):
    def __init__(self, message: str, *, code: str = "invalid_input"):
        super().__init__(message)
        self.code = code


def validate_input(raw: RawInput) -> None:
    min_chars = scoring_int("scan.min_resume_chars", 50)
    if len((raw.resume_text or "").strip()) < min_chars:
        raise ScanInputError(
            f"Resume text is too short; at least {min_chars} characters are required.",
            code="resume_too_short",
        )
    if not (raw.job_description_text or "").strip():
        raise ScanInputError("Job description text is required.", code="job_description_missing")
    mime_type = raw.file_meta.mime_type
    if mime_type and not is_supported_file_type(mime_type):
        raise ScanInputError(f"Unsupported file type '{mime_type}'.", code="unsupported_file_type")


async def _enrich(
    kind: str,
    provider: EnrichmentProvider,
    prompt: str,
    parse: Callable[[Any], ParseResult[T]],
    fallback: Callable[[], T],
) -> tuple[T, str]:
    attempts = max(1, settings.enrichment_max_attempts)
    for attempt in range(1, attempts + 1):
        try:
            payload = await provider.generate_structured_analysis(prompt)
        except EnrichmentError as exc:
            logger.warning("scan_enrichment_failed kind=%s attempt=%s code=%s: %s", kind, attempt, exc.code, exc)
            if exc.code == "llm_disabled":
                break
            continue
        except Exception as exc:
            logger.warning("scan_enrichment_failed kind=%s attempt=%s: %s", kind, attempt, exc)
            continue

        result = parse(payload)
        if isinstance(result, ParseOk):
            return result.value, "enrichment"
        logger.warning("scan_enrichment_unparseable kind=%s attempt=%s: %s", kind, attempt, result.reason)
    return fallback(), "heuristic"


async def run_scan(
    raw: RawInput,
    *,
    provider: EnrichmentProvider,
    vocabulary: SkillVocabularyProvider,
    reference_year: int | None = None,
) -> ScanReport:
    validate_input(raw)
    resume_text = raw.resume_text
    job_text = raw.job_description_text

    structural = extract_structure(resume_text, raw.resolved_job_title(), raw.file_meta)
    skills = diff_skills(resume_text, job_text, vocabulary)

    (market, market_source), (recruiter_signals, recruiter_source) = await asyncio.gather(
        _enrich(
            "market",
            provider,
            market_prompt(resume_text, job_text),
            MarketContext.from_enrichment,
            lambda: detect_market_context(resume_text, job_text),
        ),
        _enrich(
            "recruiter",
            provider,
            recruiter_prompt(resume_text),
            RecruiterSignalProfile.from_enrichment,
            lambda: score_recruiter_signals(resume_text),
        ),
    )

    predictive, predictions_source = await _enrich(
        "predictions",
        provider,
        predictions_prompt(resume_text, job_text, skills, market),
        PredictiveProfile.from_enrichment,
        lambda: score_predictions(
            skills,
            market.industry,
            resume_text,
            job_text=job_text,
            reference_year=reference_year,
        ),
    )

    report = aggregate(structural, skills, recruiter_signals, predictive, market)
    provenance = {
        "market": market_source,
        "recruiter_signals": recruiter_source,
        "predictions": predictions_source,
    }
    logger.info(
        "scan_completed overall=%s percentile=%s provenance=%s",
        report.overall_score,
        report.percentile,
        provenance,
    )
    return ScanReport(
        structural=structural,
        skills=skills,
        recruiter_signals=recruiter_signals,
        predictions=predictive,
        market=market,
        report=report,
        provenance=provenance,
    )
