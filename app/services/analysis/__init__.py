"""Document analysis adapter."""

from app.services.analysis.document_analyzer import (
    DocumentAnalyzer,
    extract_tables,
    extract_text_content,
    guess_content_type,
    mock_analyze_result,
    parse_analyze_result,
)

__all__ = [
    "DocumentAnalyzer",
    "extract_tables",
    "extract_text_content",
    "guess_content_type",
    "mock_analyze_result",
    "parse_analyze_result",
]
