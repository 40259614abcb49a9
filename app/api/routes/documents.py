"""Document upload and status API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from app.core.exceptions import AppError
from app.dependencies import get_document_service
from app.schemas.common import ApiResponse
from app.services.document_service import DocumentService
from app.utils.logging import get_logger
from app.utils.responses import create_api_response, http_error, http_error_from

LOGGER = get_logger(__name__)

router = APIRouter()


@router.post(
    "/analyze",
    response_model=ApiResponse,
    summary="Analyze a hotel rate sheet",
    description=(
        "Upload a PDF, JPG, PNG or DOCX rate sheet (max 4MB). The document is analyzed, "
        "a hotel tariff is extracted and saved to both tariff schemas."
    ),
    operation_id="analyze_tariff_document",
)
async def analyze_document(
    request: Request,
    document_service: Annotated[DocumentService, Depends(get_document_service)],
    file: UploadFile | None = File(default=None, description="Rate sheet to analyze"),
):
    """Run the upload through analysis, extraction and persistence."""
    if file is None:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Validation Error", "No file provided", request)

    content = await file.read()
    LOGGER.info(
        "Processing uploaded document",
        extra={"file_name": file.filename, "content_type": file.content_type, "size_bytes": len(content)},
    )

    try:
        payload = await document_service.analyze_upload(
            filename=file.filename or "",
            content_type=file.content_type or "",
            content=content,
        )
    except AppError as e:
        LOGGER.error(f"Document processing failed: {e.message}", extra={"file_name": file.filename})
        raise http_error_from(e, request)

    message = (
        "Hotel tariff extracted successfully"
        if payload["processingDetails"]["extractionSuccess"]
        else "Document analyzed but no hotel tariff could be extracted"
    )
    return create_api_response(data=payload, message=message, request=request)


@router.get(
    "/{document_id}",
    response_model=ApiResponse,
    summary="Get document processing status",
    operation_id="get_document_status",
)
async def get_document(
    document_id: int,
    request: Request,
    document_service: Annotated[DocumentService, Depends(get_document_service)],
):
    """Get the stored status of one uploaded document."""
    document = await document_service.get_document(document_id)
    if document is None:
        raise http_error(
            status.HTTP_404_NOT_FOUND,
            "Not Found",
            f"Document {document_id} not found",
            request,
        )

    return create_api_response(data=document, message="Document retrieved successfully", request=request)
