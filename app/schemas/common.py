"""Shared API envelope schemas."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service status
        version: Application version
        service: Service name
    """

    status: str = Field(
        default="healthy",
        description="Service health status",
        examples=["healthy", "degraded"],
    )
    version: str = Field(..., description="Application version", examples=["0.1.0"])
    service: str = Field(
        ...,
        description="Service name",
        examples=["Costing GPT - Hotel Tariff Service"],
    )


class ResponseMeta(BaseModel):
    """Metadata attached to every API response."""

    timestamp: datetime
    request_id: str
    api_version: str = "v1"


class ApiResponse(BaseModel):
    """Standard success envelope."""

    status: bool = True
    message: str = "Operation successful"
    data: Dict[str, Any] = Field(default_factory=dict)
    meta: Optional[ResponseMeta] = None


class ErrorDetail(BaseModel):
    """Problem details for HTTP APIs (RFC 7807)."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    instance: Optional[str] = None
    request_id: Optional[str] = None
    timestamp: Optional[datetime] = None
