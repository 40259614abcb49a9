"""Upload-to-tariff document processing pipeline."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AppError, DocumentAnalysisError, ValidationError
from app.models.analysis import AnalyzeResult
from app.models.tariff import ExtractionOutcome
from app.schemas.documents import DocumentStatus
from app.repositories.document_repository import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PROCESSING,
    DocumentRepository,
)
from app.services.analysis.document_analyzer import DocumentAnalyzer, extract_tables
from app.services.base_service import BaseService
from app.services.extraction.metrics import ExtractionMetrics
from app.services.extraction.orchestrator import ExtractionOrchestrator
from app.services.storage_service import BLOB_SCHEME, StorageService, safe_filename
from app.services.tariff.legacy_writer import LegacyTariffWriter, is_schema_error
from app.services.tariff.reconciler import PersistenceResult, TariffReconciler
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

DB_UNAVAILABLE_MESSAGE = (
    "Database connection not available. Tariff information was extracted but not saved."
)
NOT_SAVED_MESSAGE = (
    "Hotel tariff information was successfully extracted from the document. "
    "However, it could not be saved to either database."
)


class DocumentService(BaseService):
    """Run one uploaded rate sheet through analysis, extraction and persistence.

    Steps: store the bytes, register the document (``pending`` then
    ``processing``), analyze it, extract a tariff, mark the document
    ``completed`` or ``failed``, then write the tariff to the legacy and
    normalized schemas independently.

    A document row that cannot be written does not stop the pipeline: the
    tariff is still extracted and returned, just not saved.
    """

    def __init__(
        self,
        session: AsyncSession,
        analyzer: DocumentAnalyzer,
        orchestrator: ExtractionOrchestrator,
        storage: StorageService,
        tenant_id: str,
        max_upload_bytes: int,
        allowed_types: Sequence[str],
        metrics: Optional[ExtractionMetrics] = None,
    ):
        super().__init__()
        self.session = session
        self.analyzer = analyzer
        self.orchestrator = orchestrator
        self.storage = storage
        self.tenant_id = tenant_id
        self.max_upload_bytes = max_upload_bytes
        self.allowed_types = list(allowed_types)
        self.metrics = metrics

        self.documents = DocumentRepository(session)
        self.reconciler = TariffReconciler(session, tenant_id)
        self.legacy_writer = LegacyTariffWriter(session, tenant_id)

    async def analyze_upload(self, filename: str, content_type: str, content: bytes) -> Dict[str, Any]:
        """Process an upload and return the analysis response payload.

        Raises:
            ValidationError: If the file is missing, too large or of an
                unsupported type
            DocumentAnalysisError: If the analyzer fails
        """
        return await self.execute(filename=filename, content_type=content_type, content=content)

    def validate(self, filename: str, content_type: str, content: bytes) -> None:
        if not filename or content is None:
            raise ValidationError("No file provided")

        if len(content) > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes // (1024 * 1024)
            raise ValidationError(f"File size exceeds {limit_mb}MB limit")

        if content_type not in self.allowed_types:
            raise ValidationError(
                "Invalid file type. Only PDF, JPG, PNG, and DOCX files are supported."
            )

    async def run(self, filename: str, content_type: str, content: bytes) -> Dict[str, Any]:
        blob_url = await self._store(filename, content)
        document_id, db_available = await self._register_document(blob_url)

        try:
            result = await self.analyzer.analyze(content, filename)
        except Exception:
            if db_available:
                await self._set_status(document_id, STATUS_FAILED)
            raise

        outcome = await self.orchestrator.extract(result)
        tariff = outcome.tariff

        if db_available:
            await self._set_status(
                document_id,
                STATUS_COMPLETED if tariff else STATUS_FAILED,
                extracted_text=result.content or None,
            )

        db_result: Optional[Dict[str, Any]] = None
        new_schema_result: Optional[Dict[str, Any]] = None

        if tariff and db_available:
            db_result = (await self._save_legacy(outcome)).to_dict()
            new_schema_result = (await self.reconciler.save(tariff, document_id=document_id)).to_dict()
        elif tariff:
            db_result = {"success": False, "message": DB_UNAVAILABLE_MESSAGE, "extractedOnly": True}

        if tariff and not (db_result or {}).get("success") and not (new_schema_result or {}).get("success"):
            db_result = {"success": True, "message": NOT_SAVED_MESSAGE, "extractedOnly": True}

        return self._build_response(
            filename=filename,
            content_type=content_type,
            size=len(content),
            result=result,
            outcome=outcome,
            document_id=document_id,
            db_available=db_available,
            db_result=db_result,
            new_schema_result=new_schema_result,
        )

    async def get_document(self, document_id: int) -> Optional[DocumentStatus]:
        """Current status of a stored document, or None if it does not exist."""
        document = await self.documents.get_by_id(document_id)
        if document is None:
            return None

        return DocumentStatus(
            document_id=document.id,
            blob_url=document.blob_url,
            document_type=document.document_type,
            tenant_id=document.tenant_id,
            processing_status=document.processing_status,
            upload_date=document.upload_date,
            processed_date=document.processed_date,
            has_extracted_text=bool(document.extracted_text),
        )

    async def _store(self, filename: str, content: bytes) -> str:
        try:
            stored = await self.storage.upload_file(content, filename, self.tenant_id)
            return stored["blob_url"]
        except AppError as e:
            LOGGER.warning(f"Upload not stored, continuing with name-only reference: {e.message}")
            return f"{BLOB_SCHEME}{safe_filename(filename)}"

    async def _register_document(self, blob_url: str):
        try:
            document = await self.documents.create_document(blob_url=blob_url, tenant_id=self.tenant_id)
            await self.documents.update_status(document.id, STATUS_PROCESSING)
            return document.id, True
        except Exception as e:
            await self.session.rollback()
            LOGGER.error(
                f"Error saving document reference, continuing without database: {str(e)}",
                exc_info=True,
            )
            return None, False

    async def _set_status(self, document_id: int, status: str, extracted_text: Optional[str] = None) -> None:
        try:
            await self.documents.update_status(document_id, status, extracted_text=extracted_text)
        except Exception as e:
            await self.session.rollback()
            LOGGER.error(f"Error updating document {document_id} status to {status}: {str(e)}", exc_info=True)

    async def _save_legacy(self, outcome: ExtractionOutcome) -> PersistenceResult:
        result = await self.legacy_writer.save(outcome.tariff)
        if not is_schema_error(result):
            return result

        LOGGER.info("Legacy write failed on schema, provisioning tables and retrying once")
        try:
            await self.legacy_writer.provision()
        except Exception as e:
            await self.session.rollback()
            LOGGER.error(f"Could not provision legacy tables: {str(e)}", exc_info=True)
            return result
        return await self.legacy_writer.save(outcome.tariff)

    def _build_response(
        self,
        filename: str,
        content_type: str,
        size: int,
        result: AnalyzeResult,
        outcome: ExtractionOutcome,
        document_id: Optional[int],
        db_available: bool,
        db_result: Optional[Dict[str, Any]],
        new_schema_result: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        method = outcome.method.value
        extracted_only = bool(db_result and db_result.get("extractedOnly"))
        saved = not extracted_only and any(
            bool(r and r.get("success")) for r in (db_result, new_schema_result)
        )

        metrics = self.metrics.snapshot() if self.metrics else {}
        metrics["processingTime"] = datetime.now(timezone.utc).isoformat()

        return {
            "success": True,
            "result": result.to_dict(),
            "tables": extract_tables(result),
            "tariff": outcome.tariff.to_dict() if outcome.tariff else None,
            "dbResult": db_result,
            "newSchemaResult": new_schema_result,
            "documentId": document_id,
            "extractionMethod": method,
            "processingDetails": {
                "fileName": filename,
                "fileSize": size,
                "fileType": content_type,
                "extractionMethod": method,
                "extractionSuccess": outcome.succeeded,
                "dbSaveSuccess": saved,
                "extractedOnly": extracted_only,
                "dbAvailable": db_available,
                "analysis": result.summary(),
            },
            "metrics": metrics,
        }
