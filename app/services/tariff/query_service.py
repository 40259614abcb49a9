"""Read models over persisted tariffs."""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.models import Tariff
from app.repositories.tariff_repository import SORT_BASE_RATE, SORT_TOTAL_RATE, TariffRepository
from app.schemas.tariffs import (
    HotelSearchItem,
    PropertySummary,
    RatePlanSummary,
    RoomTypeSummary,
    SeasonSummary,
    TariffDetail,
    VendorSummary,
)
from app.services.extraction.normalization import optional_float
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

SORT_FIELDS = (SORT_BASE_RATE, SORT_TOTAL_RATE)


def total_rate(tariff: Tariff) -> float:
    """One night including tax, plus the service fee."""
    base = optional_float(tariff.base_rate)
    tax = optional_float(tariff.tax_percent)
    fee = optional_float(tariff.service_fee)
    return round(base + base * tax / 100 + fee, 2)


class TariffQueryService:
    """Lookups behind the tariff detail and hotel search endpoints."""

    def __init__(self, session: AsyncSession, tenant_id: Optional[str] = None):
        self.repository = TariffRepository(session)
        self.tenant_id = tenant_id

    async def get_tariff_detail(self, tariff_id: int) -> Optional[TariffDetail]:
        tariff = await self.repository.get_detail(tariff_id)
        if tariff is None:
            return None

        return TariffDetail(
            id=tariff.id,
            base_rate=optional_float(tariff.base_rate),
            tax_percent=optional_float(tariff.tax_percent),
            service_fee=optional_float(tariff.service_fee),
            currency=tariff.currency,
            created_at=tariff.created_at,
            updated_at=tariff.updated_at,
            property=PropertySummary(
                id=tariff.property.id,
                name=tariff.property.property_name,
                city=tariff.property.city,
                category=tariff.property.category,
            ),
            vendor=VendorSummary(id=tariff.vendor.id, name=tariff.vendor.vendor_name),
            season=SeasonSummary(
                id=tariff.season.id,
                name=tariff.season.season_name,
                start_date=tariff.season.start_date.isoformat(),
                end_date=tariff.season.end_date.isoformat(),
            ),
            room_type=RoomTypeSummary(id=tariff.room_type.id, name=tariff.room_type.room_name),
            rate_plan=RatePlanSummary(
                id=tariff.rate_plan.id,
                name=tariff.rate_plan.plan_name,
                meal_plan=tariff.rate_plan.meal_plan,
            ),
            attributes=dict(tariff.attributes.attributes) if tariff.attributes else {},
        )

    async def search_hotels(
        self,
        city: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: str = SORT_BASE_RATE,
        sort_order: str = "asc",
        limit: int = 10,
    ) -> List[HotelSearchItem]:
        """Search tariffs by city and category.

        Unknown sort fields fall back to the base rate; any order other than
        "desc" sorts ascending.
        """
        if sort_by not in SORT_FIELDS:
            sort_by = SORT_BASE_RATE

        tariffs = await self.repository.search(
            tenant_id=self.tenant_id,
            city=city,
            category=category,
            sort_by=sort_by,
            descending=sort_order.lower() == "desc",
            limit=limit,
        )
        LOGGER.info(
            f"Hotel search returned {len(tariffs)} tariffs",
            extra={"city": city, "category": category, "sort_by": sort_by},
        )

        return [
            HotelSearchItem(
                tariff_id=tariff.id,
                hotel_name=tariff.property.property_name,
                city=tariff.property.city,
                category=tariff.property.category,
                vendor=tariff.vendor.vendor_name,
                base_rate=optional_float(tariff.base_rate),
                gst_percent=optional_float(tariff.tax_percent),
                service_fee=optional_float(tariff.service_fee),
                meal_plan=tariff.rate_plan.meal_plan,
                season=tariff.season.season_name,
                start_date=tariff.season.start_date.isoformat(),
                end_date=tariff.season.end_date.isoformat(),
                total_rate=total_rate(tariff),
            )
            for tariff in tariffs
        ]
