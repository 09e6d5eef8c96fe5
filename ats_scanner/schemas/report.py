from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .profiles import (
    MarketContext,
    PredictiveProfile,
    Provenance,
    RecruiterSignalProfile,
    SkillProfile,
    StructuralProfile,
)

COMPONENT_NAMES: tuple[str, ...] = (
    "ats_compatibility",
    "skill_match",
    "recruiter_psychology",
    "market_alignment",
    "predictions",
)


class ComponentScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    ats_compatibility: int = Field(ge=0, le=100)
    skill_match: int = Field(ge=0, le=100)
    recruiter_psychology: int = Field(ge=0, le=100)
    market_alignment: int = Field(ge=0, le=100)
    predictions: int = Field(ge=0, le=100)

    def items(self) -> list[tuple[str, int]]:
        """Component scores in evaluation order."""
        return [(name, int(getattr(self, name))) for name in COMPONENT_NAMES]


class AggregateReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    percentile: int = Field(ge=5, le=95)
    breakdown: ComponentScores
    strengths: list[str] = Field(default_factory=list, max_length=5)
    weaknesses: list[str] = Field(default_factory=list, max_length=5)
    priority_fixes: list[str] = Field(default_factory=list, max_length=5)


class ScanReport(BaseModel):
    structural: StructuralProfile
    skills: SkillProfile
    recruiter_signals: RecruiterSignalProfile
    predictions: PredictiveProfile
    market: MarketContext
    report: AggregateReport
    provenance: dict[str, Provenance] = Field(default_factory=dict)
