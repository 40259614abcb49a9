"""Function tools offered to the chat model."""

import json
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.tariff_repository import TariffRepository
from app.services.extraction.normalization import to_date
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

BEST_RATE_TOOL_NAME = "getBestRate"

BEST_RATE_TOOL_SCHEMA: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": BEST_RATE_TOOL_NAME,
        "description": "Get the best hotel rate based on city, category, dates, and number of people",
        "parameters": {
            "type": "object",
            "properties": {
                "city": {"type": "string", "description": "The city where the hotel is located"},
                "category": {
                    "type": "string",
                    "description": 'The hotel category (e.g., "5-star", "luxury", "budget")',
                },
                "start": {"type": "string", "description": "The check-in date in YYYY-MM-DD format"},
                "end": {"type": "string", "description": "The check-out date in YYYY-MM-DD format"},
                "pax": {"type": "number", "description": "The number of people (used for per-person pricing)"},
            },
            "required": ["city", "category", "start", "end"],
        },
    },
}

TECHNICAL_ISSUE_MESSAGE = (
    "There is currently a technical issue with our hotel database. "
    "Please try again later."
)

_CENTS = Decimal("0.01")


def _money(value: Decimal) -> float:
    return float(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


def error_payload(error: str, message: str = TECHNICAL_ISSUE_MESSAGE) -> Dict[str, Any]:
    return {"found": False, "error": error, "message": message}


def count_nights(start: str, end: str) -> int:
    """Nights between check-in and check-out, never negative.

    Raises:
        ValueError: If either date cannot be parsed
    """
    days = (to_date(end) - to_date(start)).total_seconds() / 86400
    return max(math.ceil(days), 0)


class BestRateTool:
    """Find the cheapest persisted tariff in a city and price a stay.

    The price of a stay is ``base_rate * nights * (1 + gst/100) + service_fee``
    and the per-person price divides it by ``max(pax, 1)``. Every failure is
    returned as a ``{"found": False, ...}`` payload for the model to read.
    """

    name = BEST_RATE_TOOL_NAME
    schema = BEST_RATE_TOOL_SCHEMA

    def __init__(self, session: AsyncSession):
        self.repository = TariffRepository(session)

    async def run(
        self,
        city: str,
        category: str,
        start: str,
        end: str,
        pax: Any = 1,
    ) -> Dict[str, Any]:
        """Price a stay at the cheapest matching hotel.

        Args:
            city: City to search, matched case-insensitively as a substring
            category: Requested category; reported back but not filtered on
            start: Check-in date (YYYY-MM-DD)
            end: Check-out date (YYYY-MM-DD)
            pax: Number of guests

        Returns:
            ``{"found": True, "hotel": {...}}`` or a not-found/error payload
        """
        LOGGER.info(f"Getting best rate for: {city}, {category}, {start} to {end}, {pax} people")

        try:
            nights = count_nights(start, end)
            guests = max(int(pax or 1), 1)
        except (TypeError, ValueError, OverflowError) as e:
            LOGGER.warning(f"Invalid best-rate arguments: {str(e)}")
            return error_payload(
                f"Invalid arguments: {str(e)}",
                "Please provide check-in and check-out dates in YYYY-MM-DD format.",
            )

        try:
            tariff = await self.repository.find_cheapest_by_city(city)
        except Exception as e:
            LOGGER.error(f"Error getting best rate from database: {str(e)}", exc_info=True)
            return error_payload(f"Database error: {str(e)}")

        if tariff is None:
            LOGGER.info(f"No hotels found matching city {city!r}")
            return {
                "found": False,
                "message": "No matching hotel rates found in our database for the given criteria.",
            }

        base_rate = tariff.base_rate or Decimal("0")
        gst_percent = tariff.tax_percent or Decimal("0")
        service_fee = tariff.service_fee or Decimal("0")

        base_total = base_rate * nights
        gst_amount = base_total * gst_percent / 100
        total_price = base_total + gst_amount + service_fee
        per_person = total_price / guests

        return {
            "found": True,
            "hotel": {
                "name": tariff.property.property_name,
                "vendor": tariff.vendor.vendor_name,
                "city": tariff.property.city,
                "category": tariff.property.category or category,
                "mealPlan": tariff.rate_plan.meal_plan,
                "season": tariff.season.season_name,
                "baseRate": _money(base_rate),
                "nights": nights,
                "baseTotal": _money(base_total),
                "gst": {"percent": _money(gst_percent), "amount": _money(gst_amount)},
                "serviceFee": _money(service_fee),
                "totalPrice": _money(total_price),
                "perPerson": _money(per_person),
            },
        }

    async def invoke(self, arguments: Optional[str]) -> Dict[str, Any]:
        """Run the tool from a model-supplied JSON argument string."""
        try:
            args = json.loads(arguments or "{}")
            if not isinstance(args, dict):
                raise ValueError("arguments must be a JSON object")
            return await self.run(
                city=str(args["city"]),
                category=str(args.get("category", "")),
                start=str(args["start"]),
                end=str(args["end"]),
                pax=args.get("pax", 1),
            )
        except (KeyError, ValueError, OverflowError) as e:
            LOGGER.error(f"Error processing {self.name} function call: {str(e)}")
            return error_payload(
                f"Function call error: {str(e)}",
                "There was an error processing your request. Please try again later.",
            )
