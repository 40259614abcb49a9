"""Data models for document analyzer output."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

HOTEL_TARIFF_DOC_TYPE = "HotelTariff"


@dataclass
class DocumentField:
    """A single field recognized by a custom extraction model.

    Attributes:
        content: Field text as recognized on the page
        confidence: Model confidence in [0, 1], if reported
    """

    content: Optional[str] = None
    confidence: Optional[float] = None


@dataclass
class AnalyzedDocument:
    """A typed document recognized by a custom model.

    ``fields`` is None when the analyzer returned no usable field map.
    """

    doc_type: str
    fields: Optional[Dict[str, DocumentField]] = None
    confidence: Optional[float] = None


@dataclass
class TableCell:
    row_index: int
    column_index: int
    content: str = ""
    row_span: int = 1
    column_span: int = 1


@dataclass
class AnalyzedTable:
    row_count: int
    column_count: int
    cells: List[TableCell] = field(default_factory=list)


@dataclass
class AnalyzeResult:
    """Normalized output of one document analysis.

    Attributes:
        content: Full text of the document in reading order
        pages: Raw page descriptors (number, size, unit)
        tables: Tables with their cells
        documents: Typed documents recognized by the custom model
        model_id: Model that produced the result
    """

    content: str = ""
    pages: List[Dict[str, Any]] = field(default_factory=list)
    tables: List[AnalyzedTable] = field(default_factory=list)
    documents: List[AnalyzedDocument] = field(default_factory=list)
    model_id: Optional[str] = None

    @property
    def first_document(self) -> Optional[AnalyzedDocument]:
        return self.documents[0] if self.documents else None

    @property
    def has_hotel_tariff(self) -> bool:
        """Whether the first recognized document is a hotel tariff."""
        doc = self.first_document
        return doc is not None and doc.doc_type == HOTEL_TARIFF_DOC_TYPE

    def summary(self) -> Dict[str, Any]:
        """Counts used in processing details of API responses."""
        return {
            "modelId": self.model_id,
            "contentLength": len(self.content or ""),
            "pageCount": len(self.pages),
            "tableCount": len(self.tables),
            "documentCount": len(self.documents),
            "documentTypes": [doc.doc_type for doc in self.documents],
        }

    def to_dict(self) -> Dict[str, Any]:
        """Render the analyzer's camelCase wire shape."""
        return {
            "modelId": self.model_id,
            "content": self.content,
            "pages": list(self.pages),
            "tables": [
                {
                    "rowCount": table.row_count,
                    "columnCount": table.column_count,
                    "cells": [
                        {
                            "rowIndex": cell.row_index,
                            "columnIndex": cell.column_index,
                            "content": cell.content,
                            "rowSpan": cell.row_span,
                            "columnSpan": cell.column_span,
                        }
                        for cell in table.cells
                    ],
                }
                for table in self.tables
            ],
            "documents": [
                {
                    "docType": doc.doc_type,
                    "confidence": doc.confidence,
                    "fields": (
                        {
                            name: {"content": value.content, "confidence": value.confidence}
                            for name, value in doc.fields.items()
                        }
                        if doc.fields is not None
                        else None
                    ),
                }
                for doc in self.documents
            ],
        }
