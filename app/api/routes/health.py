"""Health check API endpoints."""

from fastapi import APIRouter

from app.config import settings
from app.core.database import db_client
from app.schemas.common import HealthCheckResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    tags=["Health"],
    summary="Health check endpoint",
    description="Check if the service is running and healthy",
    operation_id="get_api_health_status",
)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint."""
    db_health = await db_client.health_check()

    return HealthCheckResponse(
        status="healthy" if db_health["status"] == "healthy" else "degraded",
        version=settings.app_version,
        service=settings.app_name,
    )


@router.get("/health/detailed", tags=["Health"], operation_id="get_api_health_detailed")
async def detailed_health():
    """Detailed health check including external services."""
    db_health = await db_client.health_check()

    return {
        "status": "healthy" if db_health["status"] == "healthy" else "degraded",
        "database": db_health,
        "documentIntelligence": {
            "configured": settings.document_intelligence_configured,
            "mode": "live" if settings.document_intelligence_configured else "mock",
        },
        "openai": {
            "configured": settings.openai_configured,
            "missing": settings.missing_openai_settings(),
        },
        "version": settings.app_version,
    }
