from .aggregate import (
    aggregate,
    component_scores,
    component_weights,
    overall_score,
    percentile,
    priority_fixes,
    strengths_and_weaknesses,
)

__all__ = [
    "aggregate",
    "component_scores",
    "component_weights",
    "overall_score",
    "percentile",
    "priority_fixes",
    "strengths_and_weaknesses",
]
