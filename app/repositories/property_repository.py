from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base_repository import BaseRepository
from app.database.models import Property
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """Repository for hotel properties, keyed by tenant, name and city."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Property)

    async def get_or_create(
        self,
        tenant_id: str,
        property_name: str,
        city: str,
        category: Optional[str] = None,
    ) -> Tuple[Property, bool]:
        """Return the property with this identity, creating it if absent.

        Category is only used on creation; an existing row keeps its own.

        Returns:
            Tuple of (property, created)
        """
        existing = await self.find_one(tenant_id=tenant_id, property_name=property_name, city=city)
        if existing:
            return existing, False

        created = await self.create(
            tenant_id=tenant_id,
            property_name=property_name,
            city=city,
            category=category or None,
            property_type="hotel",
        )
        LOGGER.info(f"Created property {created.id}: {property_name} ({city})")
        return created, True
