"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.api.main import api_router
from app.config import settings
from app.core.database import close_database, init_database
from app.services.extraction.metrics import ExtractionMetrics
from app.utils.logging import get_logger

LOGGER = get_logger(__name__, level=settings.log_level)


class ServiceInfo(BaseModel):
    """What this deployment can do and where to find it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    service: str
    version: str
    document_intelligence_mode: str = Field(..., description="'live' or 'mock' document analysis")
    chat_enabled: bool = Field(..., description="Whether the best-rate assistant is configured")
    tenant_id: str
    endpoints: Dict[str, str]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create missing tables on startup and dispose the engine on shutdown."""
    LOGGER.info(
        "Starting application",
        extra={
            "app_name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "document_intelligence": "live" if settings.document_intelligence_configured else "mock",
            "chat_enabled": settings.openai_configured,
        },
    )

    # Uploads are still extracted, just not saved, if this fails
    try:
        await init_database(create_tables=True)
        LOGGER.info("Database initialized successfully")
    except Exception as e:
        LOGGER.error("Failed to initialize database", exc_info=True, extra={"error": str(e)})

    yield

    LOGGER.info("Shutting down application")
    await close_database()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Hotel tariff extraction from rate sheets and a best-rate chat assistant",
    lifespan=lifespan,
)

# Shared across requests so totals survive between uploads
app.state.extraction_metrics = ExtractionMetrics()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get(
    "/",
    response_model=ServiceInfo,
    response_model_by_alias=True,
    tags=["Root"],
    operation_id="get_service_info",
)
async def root() -> ServiceInfo:
    prefix = settings.api_v1_prefix
    return ServiceInfo(
        service=settings.app_name,
        version=settings.app_version,
        document_intelligence_mode="live" if settings.document_intelligence_configured else "mock",
        chat_enabled=settings.openai_configured,
        tenant_id=settings.tenant_id,
        endpoints={
            "analyze": f"{prefix}/documents/analyze",
            "hotelSearch": f"{prefix}/hotels/search",
            "tariff": f"{prefix}/tariffs/{{tariff_id}}",
            "chat": f"{prefix}/chat",
            "health": f"{prefix}/health",
        },
    )


app.include_router(api_router, prefix=settings.api_v1_prefix)
