from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.repositories.base_repository import BaseRepository
from app.database.models import Tariff, TariffAttributes, Property
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

SORT_BASE_RATE = "baseRate"
SORT_TOTAL_RATE = "totalRate"

_DETAIL_OPTIONS = (
    selectinload(Tariff.property),
    selectinload(Tariff.vendor),
    selectinload(Tariff.room_type),
    selectinload(Tariff.rate_plan),
    selectinload(Tariff.season),
    selectinload(Tariff.attributes),
)


def total_rate_expression():
    """SQL expression for one night including tax plus the service fee."""
    tax = func.coalesce(Tariff.tax_percent, 0)
    fee = func.coalesce(Tariff.service_fee, 0)
    return Tariff.base_rate + Tariff.base_rate * tax / 100 + fee


class TariffRepository(BaseRepository[Tariff]):
    """Repository for tariff facts and their attribute side-rows."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Tariff)

    async def find_by_key(
        self,
        property_id: int,
        vendor_id: int,
        room_type_id: int,
        rate_plan_id: int,
        season_id: int,
    ) -> Optional[Tariff]:
        """Get the tariff for a full composite key, if one exists."""
        return await self.find_one(
            property_id=property_id,
            vendor_id=vendor_id,
            room_type_id=room_type_id,
            rate_plan_id=rate_plan_id,
            season_id=season_id,
        )

    async def update_rates(
        self,
        tariff: Tariff,
        base_rate: Decimal,
        tax_percent: Decimal,
        service_fee: Decimal,
    ) -> Tariff:
        """Overwrite the price columns of an existing tariff in place."""
        tariff.base_rate = base_rate
        tariff.tax_percent = tax_percent
        tariff.service_fee = service_fee
        tariff.updated_at = datetime.now(timezone.utc)

        await self.session.flush()
        await self.session.commit()
        return tariff

    async def upsert_attributes(self, tariff_id: int, attributes: Dict[str, Any]) -> TariffAttributes:
        """Create the attributes row of a tariff or replace its JSON.

        Args:
            tariff_id: Tariff the attributes belong to
            attributes: JSON-serializable mapping, e.g. {"documentId": 12}

        Returns:
            The stored TariffAttributes row
        """
        result = await self.session.execute(
            select(TariffAttributes).where(TariffAttributes.tariff_id == tariff_id)
        )
        row = result.scalar_one_or_none()

        if row is None:
            row = TariffAttributes(tariff_id=tariff_id, attributes=dict(attributes))
            self.session.add(row)
        else:
            # Reassign so the JSON column is flagged dirty
            row.attributes = dict(attributes)

        await self.session.flush()
        await self.session.commit()
        return row

    async def get_detail(self, tariff_id: int) -> Optional[Tariff]:
        """Get a tariff with every dimension and its attributes eagerly loaded."""
        query = select(Tariff).options(*_DETAIL_OPTIONS).where(Tariff.id == tariff_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_cheapest_by_city(self, city: str) -> Optional[Tariff]:
        """Get the lowest base-rate tariff whose property city contains ``city``.

        Matching is a case-insensitive substring match.
        """
        query = (
            select(Tariff)
            .join(Property, Tariff.property_id == Property.id)
            .options(*_DETAIL_OPTIONS)
            .where(Property.city.ilike(f"%{city}%"))
            .order_by(Tariff.base_rate.asc(), Tariff.id.asc())
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def search(
        self,
        tenant_id: Optional[str] = None,
        city: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: str = SORT_BASE_RATE,
        descending: bool = False,
        limit: int = 10,
    ) -> List[Tariff]:
        """Search tariffs by exact property city and category.

        Args:
            tenant_id: Restrict to properties of this tenant
            city: Exact property city
            category: Exact property category
            sort_by: "baseRate" or "totalRate"
            descending: Sort direction
            limit: Maximum number of rows

        Returns:
            Tariffs with their dimensions loaded
        """
        query = (
            select(Tariff)
            .join(Property, Tariff.property_id == Property.id)
            .options(*_DETAIL_OPTIONS)
        )

        if tenant_id:
            query = query.where(Property.tenant_id == tenant_id)
        if city:
            query = query.where(Property.city == city)
        if category:
            query = query.where(Property.category == category)

        sort_column = total_rate_expression() if sort_by == SORT_TOTAL_RATE else Tariff.base_rate
        query = query.order_by(sort_column.desc() if descending else sort_column.asc(), Tariff.id.asc())

        result = await self.session.execute(query.limit(limit))
        return list(result.scalars().all())
