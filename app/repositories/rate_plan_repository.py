from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base_repository import BaseRepository
from app.database.models import RatePlan

DEFAULT_MEAL_PLAN = "Room Only"


class RatePlanRepository(BaseRepository[RatePlan]):
    """Repository for meal-plan rate plans of a property."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, RatePlan)

    async def get_or_create(self, property_id: int, meal_plan: str) -> Tuple[RatePlan, bool]:
        """Return the rate plan for a meal plan, creating it if absent.

        New plans are named ``"<meal plan> Plan"``.
        """
        meal_plan = meal_plan or DEFAULT_MEAL_PLAN

        existing = await self.find_one(property_id=property_id, meal_plan=meal_plan)
        if existing:
            return existing, False

        created = await self.create(
            property_id=property_id,
            plan_name=f"{meal_plan} Plan",
            meal_plan=meal_plan,
        )
        return created, True
