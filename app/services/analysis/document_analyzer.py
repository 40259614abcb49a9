"""Azure Document Intelligence adapter.

Documents are analyzed with a custom model trained on hotel rate sheets. The
REST flow is asynchronous: the analyze request returns an
``Operation-Location`` URL that is polled until the operation succeeds or
fails. The raw ``analyzeResult`` is normalized into :class:`AnalyzeResult`.

When the service is not configured (blank or placeholder credentials) a fixed
mock result is returned so uploads keep working in development.
"""

import asyncio
import time
from typing import Any, Dict, List, Optional

import httpx

from app.config import Settings
from app.core.exceptions import DocumentAnalysisError
from app.models.analysis import (
    HOTEL_TARIFF_DOC_TYPE,
    AnalyzedDocument,
    AnalyzedTable,
    AnalyzeResult,
    DocumentField,
    TableCell,
)
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

MOCK_MODEL_ID = "mock"

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "doc": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def guess_content_type(filename: str) -> str:
    """Map a file name to the content type sent to the analyzer."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return CONTENT_TYPES.get(extension, "application/octet-stream")


def mock_analyze_result() -> AnalyzeResult:
    """Fixed analysis result used when the analyzer is not configured."""
    fields = {
        "hotelName": DocumentField("Grand Luxury Hotel", 0.95),
        "vendor": DocumentField("Luxury Travels Ltd", 0.92),
        "city": DocumentField("Mumbai", 0.98),
        "category": DocumentField("5-star", 0.99),
        "baseRate": DocumentField("12500", 0.97),
        "gstPercent": DocumentField("18", 0.99),
        "serviceFee": DocumentField("1000", 0.95),
        "mealPlan": DocumentField("Breakfast & Dinner", 0.94),
        "season": DocumentField("Peak", 0.93),
        "startDate": DocumentField("2023-10-01", 0.96),
        "endDate": DocumentField("2024-03-31", 0.96),
        "description": DocumentField("Luxury accommodations with sea view", 0.91),
    }

    cells = []
    for row in range(3):
        for column in range(3):
            content = f"Header {column + 1}" if row == 0 else f"Row {row}, Cell {column + 1}"
            cells.append(TableCell(row_index=row, column_index=column, content=content))

    return AnalyzeResult(
        content=(
            "This is a mock document analysis result. Use this for UI testing until "
            "Document Intelligence credentials are properly configured.\n\n"
            "Sample document content would appear here."
        ),
        pages=[{"pageNumber": 1, "width": 8.5, "height": 11, "unit": "inch"}],
        tables=[AnalyzedTable(row_count=3, column_count=3, cells=cells)],
        documents=[AnalyzedDocument(doc_type=HOTEL_TARIFF_DOC_TYPE, fields=fields, confidence=0.95)],
        model_id=MOCK_MODEL_ID,
    )


def _parse_field(raw: Any) -> DocumentField:
    if not isinstance(raw, dict):
        return DocumentField()

    content = raw.get("content")
    if content is None:
        # Typed values are only present when the model could normalize the text
        for key in ("valueString", "valueNumber", "valueDate", "valueInteger"):
            if raw.get(key) is not None:
                content = str(raw[key])
                break

    return DocumentField(content=content, confidence=raw.get("confidence"))


def _parse_document(raw: Dict[str, Any]) -> AnalyzedDocument:
    raw_fields = raw.get("fields")
    fields = None
    if isinstance(raw_fields, dict):
        fields = {name: _parse_field(value) for name, value in raw_fields.items()}

    return AnalyzedDocument(
        doc_type=str(raw.get("docType", "")),
        fields=fields,
        confidence=raw.get("confidence"),
    )


def _parse_table(raw: Dict[str, Any]) -> AnalyzedTable:
    cells = [
        TableCell(
            row_index=int(cell.get("rowIndex", 0)),
            column_index=int(cell.get("columnIndex", 0)),
            content=cell.get("content") or "",
            row_span=int(cell.get("rowSpan") or 1),
            column_span=int(cell.get("columnSpan") or 1),
        )
        for cell in raw.get("cells") or []
        if isinstance(cell, dict)
    ]
    return AnalyzedTable(
        row_count=int(raw.get("rowCount") or 0),
        column_count=int(raw.get("columnCount") or 0),
        cells=cells,
    )


def parse_analyze_result(raw: Dict[str, Any], model_id: Optional[str] = None) -> AnalyzeResult:
    """Normalize a raw ``analyzeResult`` payload.

    Unknown or malformed parts are dropped rather than rejected: a document
    whose field map is not an object keeps ``fields=None``.
    """
    return AnalyzeResult(
        content=raw.get("content") or "",
        pages=[page for page in raw.get("pages") or [] if isinstance(page, dict)],
        tables=[_parse_table(t) for t in raw.get("tables") or [] if isinstance(t, dict)],
        documents=[_parse_document(d) for d in raw.get("documents") or [] if isinstance(d, dict)],
        model_id=raw.get("modelId") or model_id,
    )


def extract_text_content(result: Optional[AnalyzeResult]) -> str:
    """Full text of an analysis result, empty when there is none."""
    if result is None:
        return ""
    return result.content or ""


def extract_tables(result: Optional[AnalyzeResult]) -> List[Dict[str, Any]]:
    """Render tables as rows of cells sorted by column.

    Returns:
        One ``{"rows", "rowCount", "columnCount"}`` dict per table, where each
        row is a list of ``{"text", "rowSpan", "columnSpan"}`` cells
    """
    if result is None or not result.tables:
        return []

    rendered = []
    for table in result.tables:
        rows_by_index: Dict[int, List[TableCell]] = {}
        for cell in table.cells:
            rows_by_index.setdefault(cell.row_index, []).append(cell)

        rows = []
        for row_index in sorted(rows_by_index):
            row_cells = sorted(rows_by_index[row_index], key=lambda c: c.column_index)
            rows.append(
                [
                    {"text": cell.content or "", "rowSpan": cell.row_span, "columnSpan": cell.column_span}
                    for cell in row_cells
                ]
            )

        rendered.append({"rows": rows, "rowCount": table.row_count, "columnCount": table.column_count})
    return rendered


class DocumentAnalyzer:
    """Client for the Azure Document Intelligence analyze API.

    Attributes:
        endpoint: Resource endpoint URL
        api_key: Subscription key
        model_id: Custom model to analyze with
        api_version: REST API version
        timeout: Per-request timeout in seconds
        poll_interval: Seconds between status polls
        max_polls: Polls before giving up
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        model_id: str = "hoteldetails",
        api_version: str = "2023-07-31",
        timeout: int = 120,
        poll_interval: float = 1.0,
        max_polls: int = 120,
        configured: Optional[bool] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.model_id = model_id
        self.api_version = api_version
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self._configured = bool(endpoint and api_key) if configured is None else configured

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentAnalyzer":
        return cls(
            endpoint=settings.document_intelligence_endpoint,
            api_key=settings.document_intelligence_key,
            model_id=settings.document_intelligence_model_id,
            api_version=settings.document_intelligence_api_version,
            timeout=settings.document_intelligence_timeout,
            poll_interval=settings.document_intelligence_poll_interval,
            max_polls=settings.document_intelligence_max_polls,
            configured=settings.document_intelligence_configured,
        )

    @property
    def is_configured(self) -> bool:
        return self._configured

    @property
    def headers(self) -> Dict[str, str]:
        return {"Ocp-Apim-Subscription-Key": self.api_key}

    async def analyze(self, content: bytes, filename: str) -> AnalyzeResult:
        """Analyze a document with the custom hotel tariff model.

        Args:
            content: Raw document bytes
            filename: Original file name, used to pick the content type

        Returns:
            AnalyzeResult: Normalized analysis output

        Raises:
            DocumentAnalysisError: If the service rejects the document, the
                operation fails or polling times out
        """
        if not self.is_configured:
            LOGGER.info(
                "Document Intelligence not configured, using mock analysis result",
                extra={"file_name": filename},
            )
            return mock_analyze_result()

        content_type = guess_content_type(filename)
        LOGGER.info(
            f"Analyzing document with model {self.model_id}",
            extra={"file_name": filename, "content_type": content_type, "size_bytes": len(content)},
        )
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                operation_url = await self._begin_analyze(client, content, content_type)
                raw_result = await self._poll_until_done(client, operation_url)

        except httpx.TimeoutException as e:
            LOGGER.error("Document analysis timed out", exc_info=True, extra={"file_name": filename})
            raise DocumentAnalysisError(
                f"Document analysis timed out after {self.timeout}s", original_error=e
            ) from e

        except httpx.HTTPStatusError as e:
            LOGGER.error(
                "Document analysis request rejected",
                exc_info=True,
                extra={"status_code": e.response.status_code, "error_body": e.response.text[:500]},
            )
            raise DocumentAnalysisError(
                f"Document Intelligence error {e.response.status_code}: {e.response.text}",
                original_error=e,
            ) from e

        except httpx.RequestError as e:
            LOGGER.error("Document analysis request failed", exc_info=True, extra={"error": str(e)})
            raise DocumentAnalysisError(
                f"Failed to reach Document Intelligence: {str(e)}", original_error=e
            ) from e

        except (ValueError, KeyError, TypeError, AttributeError) as e:
            LOGGER.error(
                "Document analysis returned a malformed response",
                exc_info=True,
                extra={"file_name": filename},
            )
            raise DocumentAnalysisError(
                f"Malformed Document Intelligence response: {str(e)}", original_error=e
            ) from e

        try:
            result = parse_analyze_result(raw_result, model_id=self.model_id)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            LOGGER.error("Could not parse analyze result", exc_info=True, extra={"file_name": filename})
            raise DocumentAnalysisError(
                f"Malformed Document Intelligence result: {str(e)}", original_error=e
            ) from e

        LOGGER.info(
            "Document analysis completed",
            extra={**result.summary(), "processing_time": round(time.time() - start_time, 2)},
        )
        return result

    async def _begin_analyze(self, client: httpx.AsyncClient, content: bytes, content_type: str) -> str:
        url = f"{self.endpoint}/formrecognizer/documentModels/{self.model_id}:analyze"
        response = await client.post(
            url,
            params={"api-version": self.api_version},
            headers={**self.headers, "Content-Type": content_type},
            content=content,
        )
        response.raise_for_status()

        operation_url = response.headers.get("Operation-Location")
        if not operation_url:
            raise DocumentAnalysisError("Analyze response did not include an Operation-Location header")
        return operation_url

    async def _poll_until_done(self, client: httpx.AsyncClient, operation_url: str) -> Dict[str, Any]:
        for attempt in range(self.max_polls):
            response = await client.get(operation_url, headers=self.headers)
            response.raise_for_status()
            body = response.json()
            status = str(body.get("status", "")).lower()

            LOGGER.debug(f"Document analysis status: {status}", extra={"attempt": attempt + 1})

            if status == "succeeded":
                return body.get("analyzeResult") or {}
            if status == "failed":
                error = body.get("error") or {}
                raise DocumentAnalysisError(
                    f"Document analysis failed: {error.get('message', 'unknown error')}"
                )

            await asyncio.sleep(self.poll_interval)

        raise DocumentAnalysisError(f"Document analysis did not finish after {self.max_polls} polls")
