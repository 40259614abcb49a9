"""Repository for the flat legacy tariff schema.

The legacy tables mirror every saved tariff for older reporting queries. A
product and vendor are resolved by name, then the tariff row is keyed by
tenant, product, vendor and season.
"""

from typing import Optional, Tuple
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base_repository import BaseRepository
from app.database.models import LegacyProduct, LegacyVendor, LegacyTariff, LEGACY_TABLES
from app.core.database import Base


class LegacyTariffRepository(BaseRepository[LegacyTariff]):

    def __init__(self, session: AsyncSession):
        super().__init__(session, LegacyTariff)
        self.products = BaseRepository(session, LegacyProduct)
        self.vendors = BaseRepository(session, LegacyVendor)

    async def ensure_tables(self) -> None:
        """Create the legacy tables if they are missing."""
        connection = await self.session.connection()
        await connection.run_sync(
            lambda sync_conn: Base.metadata.create_all(sync_conn, tables=LEGACY_TABLES)
        )
        await self.session.commit()

    async def get_or_create_product(
        self, tenant_id: str, product_name: str, city: str, category: str
    ) -> LegacyProduct:
        existing = await self.products.find_one(
            tenant_id=tenant_id, product_name=product_name, city=city, category=category
        )
        if existing:
            return existing
        return await self.products.create(
            tenant_id=tenant_id,
            product_name=product_name,
            city=city,
            category=category,
            product_type="Hotel",
        )

    async def get_or_create_vendor(self, tenant_id: str, vendor_name: str) -> LegacyVendor:
        existing = await self.vendors.find_one(tenant_id=tenant_id, vendor_name=vendor_name)
        if existing:
            return existing
        return await self.vendors.create(tenant_id=tenant_id, vendor_name=vendor_name)

    async def upsert_tariff(
        self,
        tenant_id: str,
        product_id: int,
        vendor_id: int,
        season: str,
        base_rate: Decimal,
        gst_percent: Decimal,
        service_fee: Decimal,
        meal_plan: str,
        start_date: date,
        end_date: date,
        description: Optional[str] = None,
    ) -> Tuple[LegacyTariff, bool]:
        """Insert the tariff row or refresh its values in place.

        Returns:
            Tuple of (tariff, created)
        """
        values = dict(
            base_rate=base_rate,
            gst_percent=gst_percent,
            service_fee=service_fee,
            meal_plan=meal_plan,
            start_date=start_date,
            end_date=end_date,
            description=description,
        )

        existing = await self.find_one(
            tenant_id=tenant_id, product_id=product_id, vendor_id=vendor_id, season=season
        )
        if existing is None:
            created = await self.create(
                tenant_id=tenant_id,
                product_id=product_id,
                vendor_id=vendor_id,
                season=season,
                **values,
            )
            return created, True

        for key, value in values.items():
            setattr(existing, key, value)
        existing.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        await self.session.commit()
        return existing, False
