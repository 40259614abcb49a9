from typing import Optional
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base_repository import BaseRepository
from app.database.models import Document
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

STATUS_PENDING = "pending"
STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

FINAL_STATUSES = (STATUS_COMPLETED, STATUS_FAILED)


class DocumentRepository(BaseRepository[Document]):
    """Repository for uploaded rate-sheet documents.

    Tracks the processing lifecycle ``pending -> processing -> completed|failed``.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Document)

    async def create_document(
        self,
        blob_url: str,
        tenant_id: str,
        document_type: str = "hotel-tariff",
    ) -> Document:
        """Register an uploaded document in ``pending`` state.

        Args:
            blob_url: Storage location of the uploaded bytes
            tenant_id: Owning tenant
            document_type: Document kind label

        Returns:
            Created Document record
        """
        return await self.create(
            blob_url=blob_url,
            tenant_id=tenant_id,
            document_type=document_type,
            processing_status=STATUS_PENDING,
            upload_date=datetime.now(timezone.utc),
        )

    async def update_status(
        self,
        document_id: int,
        status: str,
        extracted_text: Optional[str] = None,
    ) -> bool:
        """Move a document to a new processing status.

        Final statuses also stamp ``processed_date``.

        Args:
            document_id: Document ID
            status: New status string
            extracted_text: Analyzer text to store alongside the status

        Returns:
            True if updated, False if not found
        """
        values = {"processing_status": status}
        if extracted_text is not None:
            values["extracted_text"] = extracted_text
        if status in FINAL_STATUSES:
            values["processed_date"] = datetime.now(timezone.utc)

        updated = await self.update(document_id, **values)
        if updated is None:
            LOGGER.warning(f"Document {document_id} not found for status update")
            return False

        LOGGER.info(
            f"Document {document_id} status -> {status}",
            extra={"document_id": document_id, "status": status},
        )
        return True
