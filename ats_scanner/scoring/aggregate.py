from __future__ import annotations

from ats_scanner.core.config.scoring import get_scoring_value, scoring_float, scoring_int
from ats_scanner.core.rounding import round_half_up
from ats_scanner.schemas import (
    COMPONENT_NAMES,
    AggregateReport,
    ComponentScores,
    MarketContext,
    PredictiveProfile,
    RecruiterSignalProfile,
    SkillProfile,
    StructuralProfile,
)

DEFAULT_WEIGHTS: dict[str, float] = {
    "ats_compatibility": 0.15,
    "skill_match": 0.30,
    "recruiter_psychology": 0.15,
    "market_alignment": 0.15,
    "predictions": 0.25,
}

_STRENGTH_MESSAGES = {
    "ats_compatibility": "Excellent ATS optimization",
    "skill_match": "Strong skill alignment with job requirements",
    "recruiter_psychology": "Professional presentation and strong narrative",
    "market_alignment": "Great fit for current market conditions",
    "predictions": "High potential for interview success",
}

_WEAKNESS_MESSAGES = {
    "ats_compatibility": "ATS compatibility needs improvement",
    "skill_match": "Skill gaps affecting job match",
    "recruiter_psychology": "Resume presentation could be stronger",
    "market_alignment": "Market positioning needs enhancement",
    "predictions": "Interview readiness requires development",
}


def _clamp(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))


def component_weights() -> dict[str, float]:
    configured = get_scoring_value("aggregation.weights", {}) or {}
    weights: dict[str, float] = {}
    for name in COMPONENT_NAMES:
        try:
            weights[name] = max(0.0, float(configured.get(name, DEFAULT_WEIGHTS[name])))
        except (TypeError, ValueError):
            weights[name] = DEFAULT_WEIGHTS[name]
    return weights


def ats_compatibility_score(structural: StructuralProfile) -> int:
    score = 0
    if structural.file_type_ok:
        score += scoring_int("aggregation.ats.file_type", 20)
    if structural.file_name_ok:
        score += scoring_int("aggregation.ats.file_name", 10)
    if structural.contact.has_email:
        score += scoring_int("aggregation.ats.email", 10)
    if structural.contact.has_phone:
        score += scoring_int("aggregation.ats.phone", 10)
    if structural.contact.has_location:
        score += scoring_int("aggregation.ats.location", 10)
    score += scoring_int("aggregation.ats.per_section", 5) * structural.sections.count()
    if structural.dates_valid:
        score += scoring_int("aggregation.ats.dates", 10)

    title_points = scoring_int("aggregation.ats.job_title", 10)
    title = structural.job_title_match
    if title.exact:
        score += title_points
    elif title.similarity > scoring_float("aggregation.ats.title_similarity_floor", 0.5):
        score += round_half_up(title.similarity * title_points)

    if structural.word_count_status == "optimal":
        score += scoring_int("aggregation.ats.word_count", 10)
    else:
        low = scoring_int("structure.word_count.under", 400) * scoring_float("aggregation.ats.near_ratio_low", 0.8)
        high = scoring_int("structure.word_count.over", 1200) * scoring_float("aggregation.ats.near_ratio_high", 1.2)
        if low <= structural.word_count <= high:
            score += scoring_int("aggregation.ats.word_count_near", 5)
    return _clamp(score)


def skill_match_score(skills: SkillProfile) -> int:
    if skills.required_hard_count == 0:
        return scoring_int("aggregation.skill_match.no_hard_default", 50)

    hard_coverage = 100 * len(skills.hard_found) / skills.required_hard_count
    if skills.required_soft_count == 0:
        soft_coverage = float(scoring_int("aggregation.skill_match.no_soft_default", 70))
    else:
        soft_coverage = 100 * len(skills.soft_found) / skills.required_soft_count

    critical_weight = scoring_int("skills.critical_weight", 3)
    critical_found = sum(1 for skill in skills.hard_found if skills.impact_weights.get(skill, 0) >= critical_weight)
    bonus = min(
        scoring_int("aggregation.skill_match.critical_cap", 15),
        scoring_int("aggregation.skill_match.critical_points", 3) * critical_found,
    )
    raw = (
        scoring_float("aggregation.skill_match.hard_weight", 0.7) * hard_coverage
        + scoring_float("aggregation.skill_match.soft_weight", 0.3) * soft_coverage
        + bonus
    )
    return _clamp(raw)


def recruiter_psychology_score(signals: RecruiterSignalProfile) -> int:
    blended = (
        scoring_float("aggregation.recruiter_psychology.first6s_weight", 0.40) * signals.first6s_score
        + scoring_float("aggregation.recruiter_psychology.authority_weight", 0.35) * signals.authority_score
        + scoring_float("aggregation.recruiter_psychology.narrative_weight", 0.25) * signals.narrative_score
    )
    penalty = min(
        scoring_int("aggregation.recruiter_psychology.red_flag_cap", 25),
        scoring_int("aggregation.recruiter_psychology.red_flag_points", 8) * len(signals.red_flags),
    )
    return _clamp(round_half_up(blended) - penalty)


def market_alignment_score(market: MarketContext, skills: SkillProfile) -> int:
    trending = {skill.lower() for skill in market.trending_skills}
    trending_found = sum(1 for skill in skills.hard_found if skill.lower() in trending)
    raw = (
        scoring_int("aggregation.market_alignment.base", 50)
        + scoring_int("aggregation.market_alignment.confidence_points", 30) * market.confidence
        + scoring_float("aggregation.market_alignment.competition_weight", 0.2) * (100 - market.competition_level)
        + min(
            scoring_int("aggregation.market_alignment.trending_cap", 10),
            scoring_int("aggregation.market_alignment.trending_points", 5) * trending_found,
        )
    )
    return _clamp(raw)


def predictions_score(predictive: PredictiveProfile) -> int:
    readiness = predictive.interview_readiness
    blended = (
        scoring_float("aggregation.predictions.hire_weight", 0.5) * predictive.hire_probability.point
        + scoring_float("aggregation.predictions.technical_weight", 0.2) * readiness.technical
        + scoring_float("aggregation.predictions.behavioral_weight", 0.15) * readiness.behavioral
        + scoring_float("aggregation.predictions.cultural_weight", 0.15) * readiness.cultural
    )
    penalty = 0
    if predictive.automation_risk > scoring_float("aggregation.predictions.automation_threshold", 0.7):
        penalty = scoring_int("aggregation.predictions.automation_penalty", 10)
    return _clamp(round_half_up(blended) - penalty)


def component_scores(
    structural: StructuralProfile,
    skills: SkillProfile,
    recruiter_signals: RecruiterSignalProfile,
    predictive: PredictiveProfile,
    market: MarketContext,
) -> ComponentScores:
    return ComponentScores(
        ats_compatibility=ats_compatibility_score(structural),
        skill_match=skill_match_score(skills),
        recruiter_psychology=recruiter_psychology_score(recruiter_signals),
        market_alignment=market_alignment_score(market, skills),
        predictions=predictions_score(predictive),
    )


def overall_score(breakdown: ComponentScores) -> int:
    weights = component_weights()
    total = sum(weights[name] * score for name, score in breakdown.items())
    return _clamp(total)


def percentile(overall: int, competition: int) -> int:
    raw = (
        overall * scoring_float("aggregation.percentile.score_weight", 0.8)
        + (100 - competition) * scoring_float("aggregation.percentile.competition_weight", 0.2)
    )
    return _clamp(
        raw,
        scoring_int("aggregation.percentile.min", 5),
        scoring_int("aggregation.percentile.max", 95),
    )


def strengths_and_weaknesses(
    breakdown: ComponentScores,
    skills: SkillProfile,
    recruiter_signals: RecruiterSignalProfile,
    predictive: PredictiveProfile,
) -> tuple[list[str], list[str]]:
    strength_threshold = scoring_int("aggregation.strength_threshold", 80)
    weakness_threshold = scoring_int("aggregation.weakness_threshold", 60)
    max_items = scoring_int("aggregation.max_items", 5)

    strengths: list[str] = []
    weaknesses: list[str] = []
    for name, score in breakdown.items():
        if score >= strength_threshold:
            strengths.append(_STRENGTH_MESSAGES[name])
        elif score < weakness_threshold:
            weaknesses.append(_WEAKNESS_MESSAGES[name])

    if len(skills.hard_found) > 8:
        strengths.append("Comprehensive technical skill set")
    if predictive.hire_probability.point > 70:
        strengths.append("High hire probability prediction")
    if len(recruiter_signals.red_flags) > 3:
        weaknesses.append("Multiple resume red flags identified")
    if len(skills.hard_missing) > 5:
        weaknesses.append("Significant technical skill gaps")
    return strengths[:max_items], weaknesses[:max_items]


def priority_fixes(
    breakdown: ComponentScores,
    structural: StructuralProfile,
    skills: SkillProfile,
    recruiter_signals: RecruiterSignalProfile,
) -> list[str]:
    threshold = scoring_int("aggregation.fix_threshold", 70)
    candidates: list[tuple[int, str]] = []

    if breakdown.ats_compatibility < threshold:
        if not structural.contact.has_email:
            candidates.append((10, "Add email address to contact information"))
        if not structural.contact.has_phone:
            candidates.append((10, "Include phone number in header"))
        if not structural.sections.has_experience:
            candidates.append((9, 'Add clear "Experience" or "Work History" section'))

    if breakdown.skill_match < threshold and skills.hard_missing:
        candidates.append((9, f"Develop skills in {' and '.join(skills.hard_missing[:2])}"))
        candidates.append((8, f"Highlight transferable experience related to {skills.hard_missing[0]}"))

    if breakdown.recruiter_psychology < threshold:
        if recruiter_signals.first6s_score < 60:
            candidates.append((8, "Improve resume header and professional summary"))
        if recruiter_signals.authority_score < 60:
            candidates.append((7, "Replace weak action verbs with strong leadership language"))
        if recruiter_signals.red_flags:
            candidates.append((8, f"Address red flag: {recruiter_signals.red_flags[0]}"))

    if breakdown.market_alignment < threshold:
        candidates.append((6, "Research and incorporate industry-specific keywords"))

    # sorted() is stable, so equal priorities keep their check order.
    ranked = sorted(candidates, key=lambda item: item[0], reverse=True)
    return [fix for _, fix in ranked[: scoring_int("aggregation.max_items", 5)]]


def aggregate(
    structural: StructuralProfile,
    skills: SkillProfile,
    recruiter_signals: RecruiterSignalProfile,
    predictive: PredictiveProfile,
    market: MarketContext,
) -> AggregateReport:
    breakdown = component_scores(structural, skills, recruiter_signals, predictive, market)
    overall = overall_score(breakdown)
    strengths, weaknesses = strengths_and_weaknesses(breakdown, skills, recruiter_signals, predictive)
    return AggregateReport(
        overall_score=overall,
        percentile=percentile(overall, market.competition_level),
        breakdown=breakdown,
        strengths=strengths,
        weaknesses=weaknesses,
        priority_fixes=priority_fixes(breakdown, structural, skills, recruiter_signals),
    )
