from datetime import date
from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base_repository import BaseRepository
from app.database.models import Season

DEFAULT_SEASON = "Regular"


class SeasonRepository(BaseRepository[Season]):
    """Repository for rate seasons of a property."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Season)

    async def get_or_create(
        self,
        property_id: int,
        season_name: str,
        start_date: date,
        end_date: date,
    ) -> Tuple[Season, bool]:
        """Return the season matching name and exact dates, creating it if absent.

        The same name with different dates is a different season.
        """
        season_name = season_name or DEFAULT_SEASON

        existing = await self.find_one(
            property_id=property_id,
            season_name=season_name,
            start_date=start_date,
            end_date=end_date,
        )
        if existing:
            return existing, False

        created = await self.create(
            property_id=property_id,
            season_name=season_name,
            start_date=start_date,
            end_date=end_date,
        )
        return created, True
