from __future__ import annotations

import json
import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from .types import EnrichmentError

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are an expert recruiter and labor-market analyst. "
    "Answer with a single JSON object that follows the requested shape. No prose."
)


class OpenAIEnrichmentProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 20.0,
        max_retries: int = 0,
        temperature: float = 0.2,
        max_output_tokens: int = 900,
    ):
        key = (api_key or "").strip()
        if not key:
            raise EnrichmentError("OPENAI_API_KEY is missing", code="llm_disabled")

        self._model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or None),
            timeout=timeout_s,
            max_retries=max_retries,
        )

    async def generate_structured_analysis(self, prompt: str) -> dict[str, Any]:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self._temperature,
                response_format={"type": "json_object"},
                max_tokens=self._max_output_tokens,
            )
        except Exception as exc:
            logger.warning("enrichment_request_failed model=%s: %s", self._model, exc)
            raise EnrichmentError(str(exc), code="llm_exception") from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise EnrichmentError("empty model response", code="llm_empty")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise EnrichmentError(f"model returned invalid JSON: {exc}", code="llm_invalid_json") from exc
        if not isinstance(parsed, dict):
            raise EnrichmentError("model returned a non-object JSON value", code="llm_invalid_json")
        return parsed
