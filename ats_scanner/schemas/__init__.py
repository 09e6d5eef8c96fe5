from .inputs import FileMeta, RawInput
from .profiles import (
    ContactInfo,
    HireProbability,
    InterviewReadiness,
    JobTitleMatch,
    MarketContext,
    PredictiveProfile,
    RecruiterSignalProfile,
    SalaryBand,
    SectionPresence,
    SkillProfile,
    StructuralProfile,
    TransferableSkill,
)
from .report import COMPONENT_NAMES, AggregateReport, ComponentScores, ScanReport
from .results import ParseError, ParseOk, ParseResult

__all__ = [
    "FileMeta",
    "RawInput",
    "ContactInfo",
    "SectionPresence",
    "JobTitleMatch",
    "StructuralProfile",
    "TransferableSkill",
    "SkillProfile",
    "RecruiterSignalProfile",
    "HireProbability",
    "SalaryBand",
    "InterviewReadiness",
    "PredictiveProfile",
    "MarketContext",
    "COMPONENT_NAMES",
    "ComponentScores",
    "AggregateReport",
    "ScanReport",
    "ParseOk",
    "ParseError",
    "ParseResult",
]
