"""Repository layer modules."""

from app.repositories.base_repository import BaseRepository
from app.repositories.document_repository import DocumentRepository
from app.repositories.legacy_tariff_repository import LegacyTariffRepository
from app.repositories.property_repository import PropertyRepository
from app.repositories.rate_plan_repository import RatePlanRepository
from app.repositories.room_type_repository import RoomTypeRepository
from app.repositories.season_repository import SeasonRepository
from app.repositories.tariff_repository import TariffRepository
from app.repositories.vendor_repository import VendorRepository

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "LegacyTariffRepository",
    "PropertyRepository",
    "RatePlanRepository",
    "RoomTypeRepository",
    "SeasonRepository",
    "TariffRepository",
    "VendorRepository",
]
