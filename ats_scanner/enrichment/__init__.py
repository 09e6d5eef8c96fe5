from .disabled import DisabledEnrichmentProvider
from .factory import enrichment_configured, get_enrichment_provider
from .openai_provider import OpenAIEnrichmentProvider
from .types import EnrichmentError, EnrichmentProvider

__all__ = [
    "EnrichmentProvider",
    "EnrichmentError",
    "DisabledEnrichmentProvider",
    "OpenAIEnrichmentProvider",
    "enrichment_configured",
    "get_enrichment_provider",
]
