from __future__ import annotations

from typing import Any, Protocol


class EnrichmentError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_exception"):
        super().__init__(message)
        self.code = code


class EnrichmentProvider(Protocol):
    async def generate_structured_analysis(self, prompt: str) -> dict[str, Any]:
        """Return the model's JSON object for the prompt or raise EnrichmentError."""
        ...
