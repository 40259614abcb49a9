"""Tariff lookup API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from app.dependencies import get_tariff_query_service
from app.schemas.common import ApiResponse
from app.schemas.tariffs import TariffDetailResponse
from app.services.tariff.query_service import TariffQueryService
from app.utils.responses import create_api_response, http_error

router = APIRouter()


@router.get(
    "/{tariff_id}",
    response_model=ApiResponse,
    summary="Get tariff details",
    description="Tariff with its property, vendor, season, room type, rate plan and attributes",
    operation_id="get_tariff_detail",
)
async def get_tariff(
    tariff_id: str,
    request: Request,
    query_service: Annotated[TariffQueryService, Depends(get_tariff_query_service)],
):
    # Parsed here so malformed ids get a 400 instead of FastAPI's 422
    try:
        parsed_id = int(tariff_id)
    except ValueError:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Bad Request", "Invalid tariff ID", request)

    tariff = await query_service.get_tariff_detail(parsed_id)
    if tariff is None:
        raise http_error(status.HTTP_404_NOT_FOUND, "Not Found", "Tariff not found", request)

    return create_api_response(
        data=TariffDetailResponse(tariff=tariff),
        message="Tariff retrieved successfully",
        request=request,
    )
