from __future__ import annotations

from functools import lru_cache

from ats_scanner.core.config import settings

from .disabled import DisabledEnrichmentProvider
from .openai_provider import OpenAIEnrichmentProvider
from .types import EnrichmentProvider


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def enrichment_configured() -> bool:
    if not settings.enrichment_enabled:
        return False
    if settings.ai_provider != "openai":
        return False
    api_key = (settings.openai_api_key or "").strip()
    return bool(api_key) and not _looks_like_placeholder(api_key)


@lru_cache(maxsize=1)
def get_enrichment_provider() -> EnrichmentProvider:
    if not settings.enrichment_enabled:
        return DisabledEnrichmentProvider("ENRICHMENT_ENABLED is off")
    if settings.ai_provider != "openai":
        return DisabledEnrichmentProvider(f"Unsupported AI_PROVIDER='{settings.ai_provider}'")
    if not enrichment_configured():
        return DisabledEnrichmentProvider("OPENAI_API_KEY is missing")
    return OpenAIEnrichmentProvider(
        model=settings.ai_model,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout_s=settings.enrichment_timeout_s,
    )
