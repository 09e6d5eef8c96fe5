from __future__ import annotations

from typing import Any

from .types import EnrichmentError


class DisabledEnrichmentProvider:
    """Stands in when no model is configured; every scan uses the heuristic path."""

    def __init__(self, reason: str = "enrichment disabled"):
        self._reason = reason

    async def generate_structured_analysis(self, prompt: str) -> dict[str, Any]:
        raise EnrichmentError(self._reason, code="llm_disabled")
