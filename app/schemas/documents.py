"""Schemas for document status responses."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.tariffs import CamelModel


class DocumentStatus(CamelModel):
    """Processing state of an uploaded document.

    Attributes:
        document_id: Document row id
        blob_url: Where the uploaded bytes were stored
        processing_status: pending, processing, completed or failed
    """

    document_id: int
    blob_url: str
    document_type: str
    tenant_id: str
    processing_status: str = Field(..., examples=["pending", "processing", "completed", "failed"])
    upload_date: Optional[datetime] = None
    processed_date: Optional[datetime] = None
    has_extracted_text: bool = False
