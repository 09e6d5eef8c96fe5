from .industry import competition_level, detect_industry, detect_market_context
from .predictions import score_predictions
from .recruiter_signals import authority_language, score_recruiter_signals
from .similarity import jaro_winkler
from .skill_diff import diff_skills, requirements_section
from .structure import extract_structure, match_job_title

__all__ = [
    "jaro_winkler",
    "extract_structure",
    "match_job_title",
    "diff_skills",
    "requirements_section",
    "authority_language",
    "score_recruiter_signals",
    "score_predictions",
    "detect_industry",
    "detect_market_context",
    "competition_level",
]
