from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base_repository import BaseRepository
from app.database.models import RoomType

DEFAULT_ROOM_NAME = "Standard Room"
DEFAULT_OCCUPANCY_STANDARD = 2
DEFAULT_OCCUPANCY_MAX = 3


class RoomTypeRepository(BaseRepository[RoomType]):
    """Repository for room types of a property."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, RoomType)

    async def get_or_create(
        self,
        property_id: int,
        room_name: str = DEFAULT_ROOM_NAME,
    ) -> Tuple[RoomType, bool]:
        """Return the named room type of a property, creating it if absent."""
        existing = await self.find_one(property_id=property_id, room_name=room_name)
        if existing:
            return existing, False

        created = await self.create(
            property_id=property_id,
            room_name=room_name,
            occupancy_standard=DEFAULT_OCCUPANCY_STANDARD,
            occupancy_max=DEFAULT_OCCUPANCY_MAX,
        )
        return created, True
