"""Mirror saved tariffs into the flat legacy schema."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.tariff import HotelTariff
from app.repositories.legacy_tariff_repository import LegacyTariffRepository
from app.services.extraction.normalization import to_date, to_decimal
from app.services.tariff.reconciler import PersistenceResult
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

RETRYABLE_MARKERS = ("schema", "table")


def is_schema_error(result: PersistenceResult) -> bool:
    """Whether a failed write looks like missing legacy tables."""
    message = result.message.lower()
    return not result.success and any(marker in message for marker in RETRYABLE_MARKERS)


class LegacyTariffWriter:
    """Write tariffs to the legacy products/vendors/tariffs tables.

    Same contract as the reconciler: failures come back as a result, never as
    an exception.
    """

    def __init__(self, session: AsyncSession, tenant_id: str):
        self.session = session
        self.tenant_id = tenant_id
        self.repository = LegacyTariffRepository(session)

    async def provision(self) -> None:
        """Create the legacy tables if they do not exist."""
        await self.repository.ensure_tables()
        LOGGER.info("Legacy tariff tables created/verified")

    async def save(self, tariff: HotelTariff) -> PersistenceResult:
        try:
            product = await self.repository.get_or_create_product(
                self.tenant_id, tariff.hotel_name, tariff.city, tariff.category
            )
            vendor = await self.repository.get_or_create_vendor(self.tenant_id, tariff.vendor)

            saved, created = await self.repository.upsert_tariff(
                tenant_id=self.tenant_id,
                product_id=product.id,
                vendor_id=vendor.id,
                season=tariff.season,
                base_rate=to_decimal(tariff.base_rate),
                gst_percent=to_decimal(tariff.gst_percent),
                service_fee=to_decimal(tariff.service_fee),
                meal_plan=tariff.meal_plan,
                start_date=to_date(tariff.start_date),
                end_date=to_date(tariff.end_date),
                description=tariff.description,
            )

            message = (
                "Hotel tariff information saved successfully"
                if created
                else "Hotel tariff information updated successfully"
            )
            return PersistenceResult(success=True, message=message, tariff_id=saved.id, created=created)

        except Exception as e:
            await self.session.rollback()
            LOGGER.error(
                f"Failed to save hotel tariff to legacy schema: {str(e)}",
                exc_info=True,
                extra={"hotel_name": tariff.hotel_name},
            )
            return PersistenceResult(success=False, message=f"Failed to save hotel tariff: {str(e)}")
