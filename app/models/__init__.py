"""Domain data models."""

from app.models.analysis import (
    AnalyzedDocument,
    AnalyzedTable,
    AnalyzeResult,
    DocumentField,
    TableCell,
)
from app.models.tariff import ExtractionMethod, ExtractionOutcome, HotelTariff

__all__ = [
    "AnalyzeResult",
    "AnalyzedDocument",
    "AnalyzedTable",
    "DocumentField",
    "TableCell",
    "HotelTariff",
    "ExtractionMethod",
    "ExtractionOutcome",
]
