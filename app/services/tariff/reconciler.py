"""Persist extracted tariffs into the normalized hotel schema."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.tariff import HotelTariff
from app.repositories.property_repository import PropertyRepository
from app.repositories.rate_plan_repository import RatePlanRepository
from app.repositories.room_type_repository import RoomTypeRepository
from app.repositories.season_repository import SeasonRepository
from app.repositories.tariff_repository import TariffRepository
from app.repositories.vendor_repository import VendorRepository
from app.services.extraction.normalization import to_date, to_decimal
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class PersistenceResult:
    """Outcome of writing one tariff to a schema.

    Attributes:
        success: Whether the tariff row was written
        message: Human-readable outcome, or the error on failure
        tariff_id: ID of the written tariff row
        created: True for an insert, False for an in-place update
    """

    success: bool
    message: str
    tariff_id: Optional[int] = None
    created: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "tariffId": self.tariff_id,
            "created": self.created,
        }


class TariffReconciler:
    """Resolve a tariff's dimension rows and upsert the tariff fact.

    Dimensions are resolved in order: property, vendor, room type, rate plan,
    season. Each is looked up by exact value and created when absent. The
    tariff is then looked up by all five dimension IDs and either updated in
    place or inserted, so saving the same record twice leaves one row.

    Lookups and inserts are separate statements; two concurrent saves of a new
    dimension can both insert it.
    """

    def __init__(self, session: AsyncSession, tenant_id: str):
        self.session = session
        self.tenant_id = tenant_id
        self.properties = PropertyRepository(session)
        self.vendors = VendorRepository(session)
        self.room_types = RoomTypeRepository(session)
        self.rate_plans = RatePlanRepository(session)
        self.seasons = SeasonRepository(session)
        self.tariffs = TariffRepository(session)

    async def save(self, tariff: HotelTariff, document_id: Optional[int] = None) -> PersistenceResult:
        """Save a tariff, returning a result instead of raising.

        Args:
            tariff: Extracted tariff
            document_id: Source document, recorded in the tariff attributes

        Returns:
            PersistenceResult: Success with the tariff ID, or failure with the
            error message
        """
        try:
            start_date = to_date(tariff.start_date)
            end_date = to_date(tariff.end_date)

            hotel, _ = await self.properties.get_or_create(
                tenant_id=self.tenant_id,
                property_name=tariff.hotel_name,
                city=tariff.city,
                category=tariff.category,
            )
            vendor, _ = await self.vendors.get_or_create(self.tenant_id, tariff.vendor)
            room_type, _ = await self.room_types.get_or_create(hotel.id)
            rate_plan, _ = await self.rate_plans.get_or_create(hotel.id, tariff.meal_plan)
            season, _ = await self.seasons.get_or_create(hotel.id, tariff.season, start_date, end_date)

            base_rate = to_decimal(tariff.base_rate)
            tax_percent = to_decimal(tariff.gst_percent)
            service_fee = to_decimal(tariff.service_fee)

            existing = await self.tariffs.find_by_key(
                property_id=hotel.id,
                vendor_id=vendor.id,
                room_type_id=room_type.id,
                rate_plan_id=rate_plan.id,
                season_id=season.id,
            )

            if existing is not None:
                saved = await self.tariffs.update_rates(existing, base_rate, tax_percent, service_fee)
                created = False
            else:
                saved = await self.tariffs.create(
                    property_id=hotel.id,
                    vendor_id=vendor.id,
                    room_type_id=room_type.id,
                    rate_plan_id=rate_plan.id,
                    season_id=season.id,
                    base_rate=base_rate,
                    tax_percent=tax_percent,
                    service_fee=service_fee,
                    currency="INR",
                )
                created = True

            if document_id is not None:
                await self.tariffs.upsert_attributes(saved.id, {"documentId": document_id})

            message = (
                "Hotel tariff saved to hotel schema"
                if created
                else "Hotel tariff updated in hotel schema"
            )
            LOGGER.info(
                message,
                extra={"tariff_id": saved.id, "was_created": created, "document_id": document_id},
            )
            return PersistenceResult(success=True, message=message, tariff_id=saved.id, created=created)

        except Exception as e:
            await self.session.rollback()
            LOGGER.error(
                f"Failed to save tariff to hotel schema: {str(e)}",
                exc_info=True,
                extra={"hotel_name": tariff.hotel_name, "document_id": document_id},
            )
            return PersistenceResult(success=False, message=f"Failed to save tariff to hotel schema: {str(e)}")
