"""Centralized dependency injection for FastAPI application.

Factories build services per request from the shared settings, the request's
database session and the application-wide extraction metrics.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.database import get_async_session
from app.core.exceptions import ConfigurationError
from app.core.openai_client import AzureOpenAIClient
from app.services.analysis.document_analyzer import DocumentAnalyzer
from app.services.chat.chat_service import ChatService
from app.services.chat.tools import BestRateTool
from app.services.document_service import DocumentService
from app.services.extraction.llm_extractor import LLMTariffExtractor
from app.services.extraction.metrics import ExtractionMetrics
from app.services.extraction.orchestrator import ExtractionOrchestrator
from app.services.storage_service import StorageService
from app.services.tariff.query_service import TariffQueryService
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


def get_extraction_metrics(request: Request) -> ExtractionMetrics:
    """Get the application-wide extraction metrics."""
    metrics = getattr(request.app.state, "extraction_metrics", None)
    if metrics is None:
        metrics = ExtractionMetrics()
        request.app.state.extraction_metrics = metrics
    return metrics


def get_openai_client() -> Optional[AzureOpenAIClient]:
    """Get an Azure OpenAI client, or None when it is not configured."""
    if not settings.openai_configured:
        return None
    return AzureOpenAIClient(
        endpoint=settings.openai_endpoint,
        api_key=settings.openai_key,
        deployment=settings.openai_deployment,
        api_version=settings.openai_api_version,
        timeout=settings.http_timeout,
        max_retries=settings.llm_max_retries,
    )


def get_document_analyzer() -> DocumentAnalyzer:
    return DocumentAnalyzer.from_settings(settings)


def get_storage_service() -> StorageService:
    return StorageService(settings.upload_dir)


def get_extraction_orchestrator(
    client: Annotated[Optional[AzureOpenAIClient], Depends(get_openai_client)],
    metrics: Annotated[ExtractionMetrics, Depends(get_extraction_metrics)],
) -> ExtractionOrchestrator:
    """Get the extraction cascade; the LLM step is left out without OpenAI settings."""
    llm_extractor = None
    if client is not None:
        llm_extractor = LLMTariffExtractor(client, max_chars=settings.llm_extraction_max_chars)
    return ExtractionOrchestrator(llm_extractor=llm_extractor, metrics=metrics)


async def get_document_service(
    db_session: Annotated[AsyncSession, Depends(get_async_session)],
    analyzer: Annotated[DocumentAnalyzer, Depends(get_document_analyzer)],
    orchestrator: Annotated[ExtractionOrchestrator, Depends(get_extraction_orchestrator)],
    storage: Annotated[StorageService, Depends(get_storage_service)],
    metrics: Annotated[ExtractionMetrics, Depends(get_extraction_metrics)],
) -> DocumentService:
    """Get document processing service instance.

    Returns:
        DocumentService: Upload pipeline bound to the request session
    """
    return DocumentService(
        session=db_session,
        analyzer=analyzer,
        orchestrator=orchestrator,
        storage=storage,
        tenant_id=settings.tenant_id,
        max_upload_bytes=settings.max_upload_bytes,
        allowed_types=settings.allowed_upload_types,
        metrics=metrics,
    )


async def get_tariff_query_service(
    db_session: Annotated[AsyncSession, Depends(get_async_session)]
) -> TariffQueryService:
    return TariffQueryService(db_session, tenant_id=settings.tenant_id)


async def get_chat_service(
    db_session: Annotated[AsyncSession, Depends(get_async_session)],
    client: Annotated[Optional[AzureOpenAIClient], Depends(get_openai_client)],
) -> ChatService:
    """Get chat service instance.

    Raises:
        HTTPException: 500 with ``isConfigError`` when OpenAI is not configured
    """
    if client is None:
        missing = ", ".join(settings.missing_openai_settings())
        error = ConfigurationError(
            "The chat service is not properly configured. Missing environment "
            f"variables: {missing}. Please contact the administrator."
        )
        LOGGER.error(f"Missing or invalid environment variables: {missing}")
        raise HTTPException(
            status_code=error.status_code,
            detail={"error": "Configuration error", "content": error.message, "isConfigError": True},
        )
    return ChatService(client=client, tool=BestRateTool(db_session))
