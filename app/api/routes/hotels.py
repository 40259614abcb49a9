"""Hotel search API endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.dependencies import get_tariff_query_service
from app.schemas.common import ApiResponse
from app.schemas.tariffs import HotelSearchResponse
from app.services.tariff.query_service import TariffQueryService
from app.utils.responses import create_api_response

router = APIRouter()


@router.get(
    "/search",
    response_model=ApiResponse,
    summary="Search hotel tariffs",
    description="Filter stored tariffs by city and category, sorted by base or total rate",
    operation_id="search_hotels",
)
async def search_hotels(
    request: Request,
    query_service: Annotated[TariffQueryService, Depends(get_tariff_query_service)],
    city: Optional[str] = Query(default=None, description="Exact city name"),
    category: Optional[str] = Query(default=None, description="Exact hotel category"),
    sort_by: str = Query(default="baseRate", alias="sortBy", description="baseRate or totalRate"),
    sort_order: str = Query(default="asc", alias="sortOrder", description="asc or desc"),
    limit: int = Query(default=10, ge=1, le=100),
):
    """Search hotels by city and category."""
    hotels = await query_service.search_hotels(
        city=city,
        category=category,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
    )

    return create_api_response(
        data=HotelSearchResponse(hotels=hotels, count=len(hotels)),
        message="Hotels retrieved successfully",
        request=request,
    )
