from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base_repository import BaseRepository
from app.database.models import Vendor
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

UNKNOWN_VENDOR = "Unknown Vendor"


class VendorRepository(BaseRepository[Vendor]):
    """Repository for rate providers, keyed by tenant and vendor name."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Vendor)

    async def get_or_create(self, tenant_id: str, vendor_name: str) -> Tuple[Vendor, bool]:
        """Return the vendor with this name, creating it if absent.

        An empty name resolves to the shared "Unknown Vendor" row.

        Returns:
            Tuple of (vendor, created)
        """
        vendor_name = vendor_name or UNKNOWN_VENDOR

        existing = await self.find_one(tenant_id=tenant_id, vendor_name=vendor_name)
        if existing:
            return existing, False

        created = await self.create(tenant_id=tenant_id, vendor_name=vendor_name)
        LOGGER.info(f"Created vendor {created.id}: {vendor_name}")
        return created, True
