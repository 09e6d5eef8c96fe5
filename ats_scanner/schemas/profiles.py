from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ats_scanner.core.rounding import round_half_up

from .results import ParseError, ParseOk, ParseResult

Provenance = Literal["heuristic", "enrichment"]
WordCountStatus = Literal["under", "optimal", "over"]
IndustryGrowth = Literal["declining", "stable", "growing", "booming"]


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_email: bool = False
    has_phone: bool = False
    has_location: bool = False
    links: list[str] = Field(default_factory=list)


class SectionPresence(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_experience: bool = False
    has_education: bool = False
    has_skills: bool = False
    has_summary: bool = False

    def count(self) -> int:
        return sum((self.has_experience, self.has_education, self.has_skills, self.has_summary))


class JobTitleMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    exact: bool = False
    similarity: float = Field(default=0.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _exact_implies_full_similarity(self) -> "JobTitleMatch":
        if self.exact and self.similarity != 1.0:
            raise ValueError("an exact job title match must report similarity 1.0")
        return self


class StructuralProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_type_ok: bool
    file_name_ok: bool
    contact: ContactInfo
    sections: SectionPresence
    dates_valid: bool
    word_count: int = Field(ge=0)
    word_count_status: WordCountStatus
    job_title_match: JobTitleMatch


class TransferableSkill(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    confidence: float = Field(ge=0.0, le=1.0)


class SkillProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    hard_found: list[str] = Field(default_factory=list)
    hard_missing: list[str] = Field(default_factory=list)
    soft_found: list[str] = Field(default_factory=list)
    soft_missing: list[str] = Field(default_factory=list)
    impact_weights: dict[str, int] = Field(default_factory=dict)
    emphasis: dict[str, int] = Field(default_factory=dict)
    transferable: list[TransferableSkill] = Field(default_factory=list)

    @model_validator(mode="after")
    def _found_and_missing_are_disjoint(self) -> "SkillProfile":
        if set(self.hard_found) & set(self.hard_missing):
            raise ValueError("a hard skill cannot be both found and missing")
        if set(self.soft_found) & set(self.soft_missing):
            raise ValueError("a soft skill cannot be both found and missing")
        return self

    @property
    def required_hard_count(self) -> int:
        return len(self.hard_found) + len(self.hard_missing)

    @property
    def required_soft_count(self) -> int:
        return len(self.soft_found) + len(self.soft_missing)


def _clamp_int(value: float, min_value: int, max_value: int) -> int:
    return max(min_value, min(max_value, round_half_up(value)))


def _clean_str_list(values: list[Any], max_items: int) -> list[str]:
    output: list[str] = []
    for item in values:
        if not isinstance(item, str):
            continue
        text = " ".join(item.split())
        if text:
            output.append(text[:240])
        if len(output) >= max_items:
            break
    return output


def _validation_reason(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location or 'payload'}: {first.get('msg', 'invalid value')}"


class _RecruiterPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    first6s: float = Field(allow_inf_nan=False)
    authority: float = Field(allow_inf_nan=False)
    narrative: float = Field(allow_inf_nan=False)
    red_flags: list[Any] = Field(default_factory=list, alias="redFlags")
    recruiter_tips: list[Any] = Field(default_factory=list, alias="recruiterTips")
    strong_verbs: list[Any] = Field(default_factory=list, alias="strongVerbs")
    weak_verbs: list[Any] = Field(default_factory=list, alias="weakVerbs")


class RecruiterSignalProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    first6s_score: int = Field(ge=0, le=100)
    authority_score: int = Field(ge=0, le=100)
    narrative_score: int = Field(ge=0, le=100)
    red_flags: list[str] = Field(default_factory=list)
    strong_verbs: list[str] = Field(default_factory=list)
    weak_verbs: list[str] = Field(default_factory=list)
    recruiter_tips: list[str] = Field(default_factory=list, max_length=7)
    source: Provenance = "heuristic"

    @classmethod
    def from_enrichment(cls, payload: Any) -> ParseResult["RecruiterSignalProfile"]:
        if not isinstance(payload, dict):
            return ParseError("recruiter payload must be a JSON object")
        try:
            parsed = _RecruiterPayload.model_validate(payload)
        except ValidationError as exc:
            return ParseError(_validation_reason(exc))
        return ParseOk(
            cls(
                first6s_score=_clamp_int(parsed.first6s, 0, 100),
                authority_score=_clamp_int(parsed.authority, 0, 100),
                narrative_score=_clamp_int(parsed.narrative, 0, 100),
                red_flags=_clean_str_list(parsed.red_flags, 10),
                strong_verbs=_clean_str_list(parsed.strong_verbs, 20),
                weak_verbs=_clean_str_list(parsed.weak_verbs, 20),
                recruiter_tips=_clean_str_list(parsed.recruiter_tips, 7),
                source="enrichment",
            )
        )


class HireProbability(BaseModel):
    model_config = ConfigDict(frozen=True)

    point: int = Field(ge=0, le=100)
    band: tuple[int, int]

    @model_validator(mode="after")
    def _band_contains_point(self) -> "HireProbability":
        lower, upper = self.band
        if not (0 <= lower <= self.point <= upper <= 100):
            raise ValueError("hire probability band must contain the point estimate")
        return self


class SalaryBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    conservative: int = Field(ge=0)
    market: int = Field(ge=0)
    aggressive: int = Field(ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> "SalaryBand":
        if not (self.conservative <= self.market <= self.aggressive):
            raise ValueError("salary band must satisfy conservative <= market <= aggressive")
        return self


class InterviewReadiness(BaseModel):
    model_config = ConfigDict(frozen=True)

    technical: int = Field(default=50, ge=0, le=100)
    behavioral: int = Field(default=50, ge=0, le=100)
    cultural: int = Field(default=50, ge=0, le=100)


class _HirePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    point: float = Field(allow_inf_nan=False)
    band: list[float] | None = None


class _SalaryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    conservative: float = Field(ge=0, allow_inf_nan=False)
    market: float = Field(ge=0, allow_inf_nan=False)
    aggressive: float = Field(ge=0, allow_inf_nan=False)


class _ReadinessPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    technical: float = Field(default=50, allow_inf_nan=False)
    behavioral: float = Field(default=50, allow_inf_nan=False)
    cultural: float = Field(default=50, allow_inf_nan=False)


class _PredictivePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    hire_probability: _HirePayload = Field(alias="hireProbability")
    salary: _SalaryPayload
    automation_risk: float = Field(alias="automationRisk", ge=0, allow_inf_nan=False)
    x_factor: float = Field(default=0, alias="xFactor", allow_inf_nan=False)
    interview_readiness: _ReadinessPayload = Field(default_factory=_ReadinessPayload, alias="interviewReadiness")
    drivers: list[Any] = Field(default_factory=list)
    industry_growth: str | None = Field(default=None, alias="industryGrowth")


class PredictiveProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    hire_probability: HireProbability
    salary: SalaryBand
    automation_risk: float = Field(ge=0.0, le=1.0)
    x_factor: int = Field(ge=0, le=30)
    interview_readiness: InterviewReadiness = Field(default_factory=InterviewReadiness)
    drivers: list[str] = Field(default_factory=list)
    industry_growth: IndustryGrowth = "stable"
    source: Provenance = "heuristic"

    @classmethod
    def from_enrichment(cls, payload: Any) -> ParseResult["PredictiveProfile"]:
        if not isinstance(payload, dict):
            return ParseError("predictions payload must be a JSON object")
        try:
            parsed = _PredictivePayload.model_validate(payload)
        except ValidationError as exc:
            return ParseError(_validation_reason(exc))

        point = _clamp_int(parsed.hire_probability.point, 0, 100)
        raw_band = parsed.hire_probability.band or []
        if len(raw_band) == 2 and all(math.isfinite(value) for value in raw_band):
            lower = _clamp_int(min(raw_band), 0, 100)
            upper = _clamp_int(max(raw_band), 0, 100)
        else:
            lower, upper = max(0, point - 15), min(100, point + 15)
        band = (min(lower, point), max(upper, point))

        # Models sometimes answer on a 0-100 scale.
        risk = parsed.automation_risk / 100 if parsed.automation_risk > 1 else parsed.automation_risk
        salary_values = sorted(
            round_half_up(value)
            for value in (parsed.salary.conservative, parsed.salary.market, parsed.salary.aggressive)
        )
        growth = (parsed.industry_growth or "").strip().lower()
        readiness = parsed.interview_readiness

        return ParseOk(
            cls(
                hire_probability=HireProbability(point=point, band=band),
                salary=SalaryBand(
                    conservative=salary_values[0],
                    market=salary_values[1],
                    aggressive=salary_values[2],
                ),
                automation_risk=round(max(0.0, min(1.0, risk)), 2),
                x_factor=_clamp_int(parsed.x_factor, 0, 30),
                interview_readiness=InterviewReadiness(
                    technical=_clamp_int(readiness.technical, 0, 100),
                    behavioral=_clamp_int(readiness.behavioral, 0, 100),
                    cultural=_clamp_int(readiness.cultural, 0, 100),
                ),
                drivers=_clean_str_list(parsed.drivers, 10),
                industry_growth=growth if growth in {"declining", "stable", "growing", "booming"} else "stable",  # type: ignore[arg-type]
                source="enrichment",
            )
        )


class _MarketPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    industry: str = Field(min_length=1, max_length=80)
    secondary: list[Any] = Field(default_factory=list)
    confidence: float = Field(ge=0, allow_inf_nan=False)
    competition: float = Field(ge=0, allow_inf_nan=False)
    trending_skills: list[Any] = Field(default_factory=list, alias="trendingSkills")
    declining_skills: list[Any] = Field(default_factory=list, alias="decliningSkills")


class MarketContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: str
    secondary: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    competition_level: int = Field(ge=0, le=100)
    trending_skills: list[str] = Field(default_factory=list)
    declining_skills: list[str] = Field(default_factory=list)
    source: Provenance = "heuristic"

    @classmethod
    def from_enrichment(cls, payload: Any) -> ParseResult["MarketContext"]:
        if not isinstance(payload, dict):
            return ParseError("market payload must be a JSON object")
        try:
            parsed = _MarketPayload.model_validate(payload)
        except ValidationError as exc:
            return ParseError(_validation_reason(exc))

        industry = " ".join(parsed.industry.split())
        if not industry:
            return ParseError("industry: must not be blank")
        confidence = parsed.confidence / 100 if parsed.confidence > 1 else parsed.confidence
        return ParseOk(
            cls(
                industry=industry,
                secondary=_clean_str_list(parsed.secondary, 5),
                confidence=round(min(1.0, confidence), 2),
                competition_level=_clamp_int(parsed.competition, 0, 100),
                trending_skills=_clean_str_list(parsed.trending_skills, 12),
                declining_skills=_clean_str_list(parsed.declining_skills, 12),
                source="enrichment",
            )
        )
