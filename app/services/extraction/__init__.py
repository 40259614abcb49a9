"""Hotel tariff extraction from analyzed documents.

Strategies, in the order the orchestrator tries them:
- structured_extractor: typed fields of the custom analyzer model
- regex_extractor: label patterns over the document text
- llm_extractor: chat-model JSON extraction
"""

from app.services.extraction.llm_extractor import LLMTariffExtractor
from app.services.extraction.metrics import ExtractionMetrics
from app.services.extraction.orchestrator import ExtractionOrchestrator, ExtractionStep
from app.services.extraction.regex_extractor import extract_with_regex, is_useful
from app.services.extraction.structured_extractor import extract_from_structured_model

__all__ = [
    "ExtractionMetrics",
    "ExtractionOrchestrator",
    "ExtractionStep",
    "LLMTariffExtractor",
    "extract_from_structured_model",
    "extract_with_regex",
    "is_useful",
]
